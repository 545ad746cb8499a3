# pgpkit

Building blocks for OpenPGP implementations:

- `pgpkit.sym` – `SymmetricKeyAlgorithm` with OpenPGP CFB encryption,
  including the MDC-protected variant (`encrypt_protected` / `decrypt_protected`)
  and plain CFB (`encrypt_with_iv_regular` / `decrypt_with_iv_regular`).
- `pgpkit.aes_kw` – AES Key Wrap (RFC 3394): `wrap(key, data)` and `unwrap(key, data)`.
- `pgpkit.rsa` – RSA key generation, PKCS#1 v1.5 encryption and signatures.
- `pgpkit.hash` – `HashAlgorithm` with `digest`, `digest_size` and incremental `Hasher`s.
- `pgpkit.checksum` – the two-octet OpenPGP checksum and SHA-1 checksums.
- `pgpkit.ecc_curve` – `EccCurve` names, OIDs and bit sizes; `ecc_curve_from_oid`.
- `pgpkit.normalize_lines` – `normalize` line endings to LF, CR or CRLF.
- `pgpkit.line_reader` – `LineReader`, a seekable reader that skips line breaks.
- `pgpkit.errors` – `PgpError` and its `ErrorKind`.

## Installation

```
pip install .
```

## Examples

Protected symmetric encryption round trip:

```python
from pgpkit.sym import SymmetricKeyAlgorithm

alg = SymmetricKeyAlgorithm.AES128
key = bytes(alg.key_size())
ciphertext = alg.encrypt_protected(key, b"hello")
assert alg.decrypt_protected(key, ciphertext) == b"hello"
```

AES key wrap:

```python
from pgpkit.aes_kw import wrap, unwrap

kek = bytes(range(16))
wrapped = wrap(kek, bytes.fromhex("00112233445566778899aabbccddeeff"))
assert unwrap(kek, wrapped).hex() == "00112233445566778899aabbccddeeff"
```

Line ending normalization:

```python
from pgpkit.normalize_lines import LineBreak, normalize

assert normalize(b"a\rb\nc", LineBreak.CRLF) == b"a\r\nb\r\nc"
```

Errors are raised as `pgpkit.errors.PgpError`; `error.kind` tells what went
wrong and `error.code()` gives its numeric code.

## Tests

```
pip install .[test]
pytest
```