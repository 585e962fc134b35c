# nusspli

A small library for working with NUS title content: title metadata
(TMD) files, fake tickets and certificate chains, title-ID lookups, and
the pieces of a self-update check. It has no dependencies outside the
standard library.

## Modules

### `nusspli.utils`

- Character tests on single ASCII characters: `is_number`,
  `is_lowercase`, `is_uppercase`, `is_alphanumerical`, `is_hexa`,
  `is_lowercase_hexa`, `is_uppercase_hexa` and `is_allowed_in_filename`
  (printable ASCII other than `/ \ " * : < > ? |`). Anything that is not
  a one-character string raises `ValueError`.
- `hex_string(value, digits)`: an unsigned 64-bit value as lowercase
  hex, zero-padded to `digits` (0 to 99).
- `hex_to_bytes(text)`: decodes pairs of hex characters into at most 64
  bytes. Non-hex characters decode as `0xF`/`0xFF` nibbles rather than
  raising; an odd-length string raises `ValueError`.
- `secs_to_time(seconds)`: for example `"1 hours 01 minutes 05 seconds"`,
  or `"N/A"` for zero.
- `speed_string(byte_per_second)`: the rate in bits and bytes, e.g.
  `"8.00 Kb/s (1.00 KB/s)"`.

### `nusspli.tmd`

- `parse_tmd(data)` reads the big-endian TMD layout into a `Tmd`,
  with its 64 `TmdContentInfo` records and one `TmdContent` per
  declared content. Short or truncated data raises `ValueError`.
- `Tmd.to_bytes()` writes it back; reserved areas come out as zeros.
- `TmdContent.flags` gives the content type as `ContentType` flags
  (`ENCRYPTED`, `HASHED`, `CONTENT`, `UNKNOWN`).
- `fs_align(value)` rounds up to a multiple of 0x40.

### `nusspli.titles`

- `tid_high(tid)` and `category_for_tid(tid)` classify a 64-bit title
  ID (`TidHigh`, `TitleCategory`).
- `TitleDatabase` holds `TitleEntry` lists per category. If no `ALL`
  list is given it is built from the others.
  - `entries(category)`
  - `entry_by_tid(tid)`: games are also searched among disc titles.
  - `tid_to_name(tid)`: takes a 16-digit hex ID, returns the name or
    `"UNKNOWN"`.
  - `name_to_tid(name)`: the 16-digit hex ID of an exact name, or
    `None`.
- `TitleKey` enumerates the key-derivation password kinds an entry may
  name.

### `nusspli.ticket`

- `build_header(file_type, version, rng)`: the 0x140-byte marker header
  (magic bytes, `"NUSspli"`, the version string of at most 16 ASCII
  bytes, `"Ticket"` or `"Certificate"`, and random bytes).
- `build_ticket(title_id, title_version, key, version, rng)`: a 0x2B8-byte
  ticket without sections for a title and a 16-byte encrypted title key.
  Its ticket ID is random with the prefix `0x0005`.
- `build_cert(version, rng)`: the three-part certificate chain with
  random signatures.
- `write_ticket(...)` and `write_cert(...)` write the same bytes to a
  path and return them.
- `rng` is a callable taking a byte count and returning that many
  bytes; it defaults to `os.urandom`. Pass a deterministic one to get
  reproducible output.

### `nusspli.updater`

- `update_check_url(variant)`: the check URL for a `NusspliType` or one
  of `"aroma"`, `"channel"`, `"hbl"`, `"lite"`.
- `parse_update_response(payload, own_type)`: interprets the server's
  JSON. Returns an `UpdateInfo(version, type)` when an update is
  offered, `None` when there is none or the answer is unreadable, and
  raises `UpdateError` on server-side errors or unknown states.
- `release_url(new_version, kind, lite, debug)`: the download URL of a
  release archive.
- `extract_update(archive, destination)`: unpacks a zip given as bytes,
  a path or a binary file object, creating directories as needed and
  refusing absolute or `..` entries. Returns the written paths in
  archive order; failures raise `UpdateError`.

The server addresses in `nusspli.updater` (`NAPI_URL`,
`UPDATE_DOWNLOAD_URL`) are example.com placeholders.

## What this package does not do

- It does not download anything. The updater functions build URLs and
  interpret responses and archives; fetching them is up to the caller.
- It does not install, uninstall or move titles, and has no user
  interface or menus.
- It ships no title list: a `TitleDatabase` holds only the entries you
  give it.
- It does not derive title keys; `build_ticket` takes an already
  encrypted key.

## Installing

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Example

```python
from nusspli.tmd import parse_tmd
from nusspli.ticket import write_cert, write_ticket

with open("title.tmd", "rb") as fh:
    tmd = parse_tmd(fh.read())

encrypted_title_key = bytes(16)  # all zeros, for illustration only
write_ticket("title.tik", tmd.tid, tmd.title_version, encrypted_title_key, "1.0.0")
write_cert("title.cert", "1.0.0")
```