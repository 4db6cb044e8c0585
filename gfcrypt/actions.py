"""Dispatch of named actions with JSON-style arguments, and batch runs of testcases."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Mapping
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any

from gfcrypt.crack import Message, gcm_crack
from gfcrypt.factoring import ddf, edf, sff, sort_factors
from gfcrypt.gcm import gcm_decrypt, gcm_encrypt
from gfcrypt.gf128 import block2poly, gfdiv_blocks, gfmul_blocks, poly2block
from gfcrypt.padding_oracle import padding_oracle
from gfcrypt.poly import Poly, sort_polys
from gfcrypt.prng import glasskey_prng
from gfcrypt.sea128 import sea128
from gfcrypt.xex import xex

logger = logging.getLogger(__name__)

Arguments = Mapping[str, Any]
Handler = Callable[[Arguments], dict[str, Any]]


class UnknownActionError(LookupError):
    """No handler exists for the requested action."""

    def __init__(self, action: str) -> None:
        super().__init__(f"unknown action: {action!r}")
        self.action = action


def _field(args: Arguments, name: str) -> Any:
    """Look up ``name``, preferring an exact key and falling back to case-insensitive."""
    if name in args:
        return args[name]
    folded = name.casefold()
    for key, value in args.items():
        if isinstance(key, str) and key.casefold() == folded:
            return value
    return None


def _str(args: Arguments, name: str) -> str:
    value = _field(args, name)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise TypeError(f"field {name!r} must be a string")
    return value


def _int(args: Arguments, name: str) -> int:
    value = _field(args, name)
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"field {name!r} must be an integer")
    return value


def _str_list(args: Arguments, name: str) -> list[str]:
    value = _field(args, name)
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise TypeError(f"field {name!r} must be a list of strings")
    return value


def _int_list(args: Arguments, name: str, *, unsigned: bool = False) -> list[int]:
    value = _field(args, name)
    if value is None:
        return []
    if not isinstance(value, list) or not all(
        isinstance(v, int) and not isinstance(v, bool) for v in value
    ):
        raise TypeError(f"field {name!r} must be a list of integers")
    if unsigned and any(v < 0 for v in value):
        raise ValueError(f"field {name!r} must not hold negative numbers")
    return value


def _poly(args: Arguments, name: str) -> Poly:
    return Poly.from_base64(_str_list(args, name))


def _object(args: Arguments, name: str) -> Arguments:
    value = _field(args, name)
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise TypeError(f"field {name!r} must be an object")
    return value


def _message(args: Arguments, name: str) -> Message:
    obj = _object(args, name)
    return Message(
        ciphertext=_str(obj, "ciphertext"),
        associated_data=_str(obj, "associated_data"),
        tag=_str(obj, "tag"),
    )


def _poly2block(args: Arguments) -> dict[str, Any]:
    coefficients = _int_list(args, "coefficients", unsigned=True)
    return {"block": poly2block(_str(args, "semantic"), coefficients)}


def _block2poly(args: Arguments) -> dict[str, Any]:
    return {"coefficients": block2poly(_str(args, "semantic"), _str(args, "block"))}


def _gfmul(args: Arguments) -> dict[str, Any]:
    product = gfmul_blocks(_str(args, "semantic"), _str(args, "a"), _str(args, "b"))
    return {"product": product}


def _gfdiv(args: Arguments) -> dict[str, Any]:
    return {"q": gfdiv_blocks(_str(args, "a"), _str(args, "b"))}


def _sea128(args: Arguments) -> dict[str, Any]:
    output = sea128(_str(args, "mode"), _str(args, "key"), _str(args, "input"))
    return {"output": output}


def _xex(args: Arguments) -> dict[str, Any]:
    output = xex(
        _str(args, "mode"), _str(args, "key"), _str(args, "tweak"), _str(args, "input")
    )
    return {"output": output}


def _padding_oracle(args: Arguments) -> dict[str, Any]:
    plaintext = padding_oracle(
        _str(args, "hostname"),
        _int(args, "port"),
        _str(args, "iv"),
        _str(args, "ciphertext"),
    )
    return {"plaintext": plaintext}


def _gcm_encrypt(args: Arguments) -> dict[str, Any]:
    result = gcm_encrypt(
        _str(args, "algorithm"),
        _str(args, "nonce"),
        _str(args, "key"),
        _str(args, "plaintext"),
        _str(args, "ad"),
    )
    return {
        "ciphertext": result.ciphertext,
        "tag": result.tag,
        "L": result.length_block,
        "H": result.hash_key,
    }


def _gcm_decrypt(args: Arguments) -> dict[str, Any]:
    result = gcm_decrypt(
        _str(args, "algorithm"),
        _str(args, "nonce"),
        _str(args, "key"),
        _str(args, "ciphertext"),
        _str(args, "ad"),
        _str(args, "tag"),
    )
    return {"authentic": result.authentic, "plaintext": result.plaintext}


def _gfpoly_add(args: Arguments) -> dict[str, Any]:
    return {"S": (_poly(args, "A") + _poly(args, "B")).to_base64()}


def _gfpoly_mul(args: Arguments) -> dict[str, Any]:
    return {"P": (_poly(args, "A") * _poly(args, "B")).to_base64()}


def _gfpoly_pow(args: Arguments) -> dict[str, Any]:
    return {"Z": (_poly(args, "A") ** _int(args, "k")).to_base64()}


def _gfpoly_divmod(args: Arguments) -> dict[str, Any]:
    quotient, remainder = divmod(_poly(args, "A"), _poly(args, "B"))
    return {"Q": quotient.to_base64(), "R": remainder.to_base64()}


def _gfpoly_powmod(args: Arguments) -> dict[str, Any]:
    result = _poly(args, "A").powmod(_int(args, "k"), _poly(args, "M"))
    return {"Z": result.to_base64()}


def _gfpoly_sort(args: Arguments) -> dict[str, Any]:
    value = _field(args, "polys")
    if value is None:
        value = []
    if not isinstance(value, list):
        raise TypeError("field 'polys' must be a list")
    polys = [_poly({"p": item}, "p") for item in value]
    return {"sorted_polys": [poly.to_base64() for poly in sort_polys(polys)]}


def _gfpoly_make_monic(args: Arguments) -> dict[str, Any]:
    return {"A*": _poly(args, "A").make_monic().to_base64()}


def _gfpoly_sqrt(args: Arguments) -> dict[str, Any]:
    return {"S": _poly(args, "Q").sqrt().to_base64()}


def _gfpoly_diff(args: Arguments) -> dict[str, Any]:
    return {"F'": _poly(args, "F").diff().to_base64()}


def _gfpoly_gcd(args: Arguments) -> dict[str, Any]:
    return {"G": _poly(args, "A").gcd(_poly(args, "B")).to_base64()}


def _gfpoly_factor_sff(args: Arguments) -> dict[str, Any]:
    factors = sort_factors(sff(_poly(args, "F")))
    return {"factors": [factor.to_json("exponent") for factor in factors]}


def _gfpoly_factor_ddf(args: Arguments) -> dict[str, Any]:
    factors = sort_factors(ddf(_poly(args, "F")))
    return {"factors": [factor.to_json("degree") for factor in factors]}


def _gfpoly_factor_edf(args: Arguments) -> dict[str, Any]:
    factors = sort_polys(edf(_poly(args, "F"), _int(args, "d")))
    return {"factors": [factor.to_base64() for factor in factors]}


def _gcm_crack(args: Arguments) -> dict[str, Any]:
    result = gcm_crack(
        _str(args, "nonce"),
        _message(args, "m1"),
        _message(args, "m2"),
        _message(args, "m3"),
        _message(args, "forgery"),
    )
    return {"tag": result.tag, "mask": result.mask, "H": result.h}


def _glasskey_prng(args: Arguments) -> dict[str, Any]:
    blocks = glasskey_prng(
        _str(args, "agency_key"), _str(args, "seed"), _int_list(args, "lengths")
    )
    return {"blocks": blocks}


_HANDLERS: dict[str, Handler] = {
    "poly2block": _poly2block,
    "block2poly": _block2poly,
    "gfmul": _gfmul,
    "sea128": _sea128,
    "xex": _xex,
    "padding_oracle": _padding_oracle,
    "gcm_encrypt": _gcm_encrypt,
    "gcm_decrypt": _gcm_decrypt,
    "gfpoly_add": _gfpoly_add,
    "gfpoly_mul": _gfpoly_mul,
    "gfpoly_pow": _gfpoly_pow,
    "gfdiv": _gfdiv,
    "gfpoly_divmod": _gfpoly_divmod,
    "gfpoly_powmod": _gfpoly_powmod,
    "gfpoly_sort": _gfpoly_sort,
    "gfpoly_make_monic": _gfpoly_make_monic,
    "gfpoly_sqrt": _gfpoly_sqrt,
    "gfpoly_diff": _gfpoly_diff,
    "gfpoly_gcd": _gfpoly_gcd,
    "gfpoly_factor_sff": _gfpoly_factor_sff,
    "gfpoly_factor_ddf": _gfpoly_factor_ddf,
    "gfpoly_factor_edf": _gfpoly_factor_edf,
    "gcm_crack": _gcm_crack,
    "glasskey_prng": _glasskey_prng,
}


def run_action(action: str, arguments: Arguments) -> dict[str, Any]:
    """Run one action on its arguments and return its response object."""
    try:
        handler = _HANDLERS[action]
    except KeyError:
        raise UnknownActionError(action) from None
    if not isinstance(arguments, Mapping):
        raise TypeError("arguments must be an object")
    return handler(arguments)


def _jobs(document: Arguments) -> dict[str, tuple[str, Arguments]]:
    if not isinstance(document, Mapping):
        raise TypeError("the testcase document must be an object")
    testcases = _object(document, "testcases")
    jobs: dict[str, tuple[str, Arguments]] = {}
    for key, testcase in testcases.items():
        if not isinstance(testcase, Mapping):
            raise TypeError(f"testcase {key!r} must be an object")
        action = _str(testcase, "action")
        arguments = _field(testcase, "arguments")
        jobs[key] = (action, {} if arguments is None else arguments)
    return jobs


def run_testcases(document: Arguments) -> dict[str, dict[str, dict[str, Any]]]:
    """Run every testcase of ``document`` and collect the responses by key.

    Failing testcases are logged and left out of the responses.
    """
    jobs = _jobs(document)
    responses: dict[str, dict[str, Any]] = {}
    with ThreadPoolExecutor(max_workers=os.cpu_count() or 1) as pool:
        futures: dict[str, Future[dict[str, Any]]] = {
            key: pool.submit(run_action, action, arguments)
            for key, (action, arguments) in jobs.items()
        }
        for key in sorted(futures):
            action, arguments = jobs[key]
            try:
                responses[key] = futures[key].result()
            except UnknownActionError:
                logger.error("Unknown action: %s", action)
            except Exception as exc:  # noqa: BLE001 - a failing testcase must not stop the run
                logger.error(
                    "Error in testcase %s (action %s, arguments %r): %s",
                    key,
                    action,
                    arguments,
                    exc,
                )
    return {"responses": responses}