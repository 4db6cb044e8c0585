# gfcrypt

gfcrypt runs the testcases in a JSON file. It covers arithmetic in GF(2^128),
operations on polynomials over that field (including square-free,
distinct-degree and equal-degree factoring), the SEA-128 block cipher
(AES-128 with its output XORed with a fixed constant), XEX full-disk
encryption, GCM with AES-128 or SEA-128, recovery of the GCM hash key from
messages that share a nonce, a padding-oracle client and the glasskey PRNG.

## Installation

```
pip install .
```

To run the test suite as well:

```
pip install ".[test]"
pytest
```

## Command line

```
gfcrypt cases.json
```

The input file has this shape:

```json
{
  "testcases": {
    "case-1": {
      "action": "gfmul",
      "arguments": {
        "semantic": "gcm",
        "a": "wAAAAAAAAAAAAAAAAAAAAA==",
        "b": "wAAAAAAAAAAAAAAAAAAAAA=="
      }
    }
  }
}
```

The command prints one compact JSON object with sorted keys to standard
output. Its `responses` member maps each testcase name to that case's result.
When a case fails, or names an action that is not known, an error message is
logged to standard error and the case has no entry in `responses`. The
testcases run in parallel on a thread pool. If the file cannot be read, is not
valid JSON or is not shaped as above, the command prints a message to
standard error and exits with status 1.

Argument names are matched exactly first and otherwise without regard to case.

Supported actions: `poly2block`, `block2poly`, `gfmul`, `gfdiv`, `sea128`,
`xex`, `padding_oracle`, `gcm_encrypt`, `gcm_decrypt`, `gfpoly_add`,
`gfpoly_mul`, `gfpoly_pow`, `gfpoly_divmod`, `gfpoly_powmod`, `gfpoly_sort`,
`gfpoly_make_monic`, `gfpoly_sqrt`, `gfpoly_diff`, `gfpoly_gcd`,
`gfpoly_factor_sff`, `gfpoly_factor_ddf`, `gfpoly_factor_edf`, `gcm_crack`
and `glasskey_prng`.

## Library use

```python
from gfcrypt.gf128 import gfmul_blocks
from gfcrypt.poly import Poly
from gfcrypt.actions import run_action

gfmul_blocks("gcm", "wAAAAAAAAAAAAAAAAAAAAA==", "wAAAAAAAAAAAAAAAAAAAAA==")
# 'oAAAAAAAAAAAAAAAAAAAAA=='

a = Poly.from_base64(["JAAAAAAAAAAAAAAAAAAAAA==", "wAAAAAAAAAAAAAAAAAAAAA=="])
(a * a).to_base64()

run_action("gfpoly_add", {"A": ["AAAAAAAAAAAAAAAAAAAAAA=="], "B": ["gAAAAAAAAAAAAAAAAAAAAA=="]})
# {'S': ['gAAAAAAAAAAAAAAAAAAAAA==']}
```

The modules:

- `gfcrypt.blocks`: conversions between Base64, integers and the XEX/GCM bit orders, and the `Text` type.
- `gfcrypt.gf128`: field multiplication, inversion, division and powers, plus `poly2block`, `block2poly`, `gfmul_blocks` and `gfdiv_blocks`.
- `gfcrypt.sea128`: `aes_encrypt`, `aes_decrypt`, `sea128_encrypt`, `sea128_decrypt` and `sea128`.
- `gfcrypt.xex`: `xex_encrypt`, `xex_decrypt` and `xex`.
- `gfcrypt.gcm`: `gcm_encrypt`, `gcm_decrypt`, `ghash` and their building blocks.
- `gfcrypt.poly`: the `Poly` class (`+`, `*`, `divmod`, `%`, `**`, `powmod`, `gcd`, `make_monic`, `diff`, `sqrt`, ordering) and `sort_polys`.
- `gfcrypt.factoring`: `sff`, `ddf`, `edf`, `Factor` and `sort_factors`.
- `gfcrypt.crack`: `find_roots` and `gcm_crack`, which returns a `CrackResult`.
- `gfcrypt.padding_oracle`: `padding_oracle`, raising `PaddingOracleError` on connection problems.
- `gfcrypt.prng`: `glasskey_prng` and `glasskey_block`.
- `gfcrypt.actions`: `run_action` and `run_testcases`; an unknown action raises `UnknownActionError`.

Blocks are exchanged as Base64 strings of 16 bytes. With the `gcm` semantic
the bit order follows GCM, where the first bit is the coefficient of x^0.
With the `xex` semantic a block is read as a little-endian number.

## What it does not do

The `padding_oracle` action is only a client: it connects over TCP to an
oracle server given by host name and port, and no such server is included.
The polynomial arithmetic favours clarity over speed and is not meant for
production cryptography.