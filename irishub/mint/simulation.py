"""Store decoding and randomized genesis and parameters for simulations."""

from __future__ import annotations

import json
import logging
import random
from collections.abc import Callable
from dataclasses import dataclass

from ..sdk.numeric import Dec
from .model import (
    KEY_INFLATION,
    MINT_DENOM,
    MINTER_KEY,
    MODULE_NAME,
    GenesisState,
    Minter,
    Params,
    default_minter,
)

INFLATION = "inflation"

_log = logging.getLogger(__name__)

KVPair = tuple[bytes, bytes]


@dataclass(frozen=True)
class ParamChange:
    """A parameter that simulated proposals may change, with its value generator."""

    subspace: str
    key: str
    simulate: Callable[[random.Random], str]

    @property
    def composite_key(self) -> str:
        return f"{self.subspace}/{self.key}"


def new_decode_store() -> Callable[[KVPair, KVPair], str]:
    """Return a function describing two stored values of the same mint key."""

    def decode(kv_a: KVPair, kv_b: KVPair) -> str:
        key_a, value_a = kv_a
        _, value_b = kv_b
        if bytes(key_a) == MINTER_KEY:
            minter_a = Minter.from_dict(json.loads(value_a))
            minter_b = Minter.from_dict(json.loads(value_b))
            return f"{minter_a}\n{minter_b}"
        raise ValueError(f"invalid mint key {bytes(key_a).hex().upper()}")

    return decode


def gen_inflation(rng: random.Random) -> Dec:
    """Return a random inflation rate between 0.00 and 0.98 in steps of 0.01."""
    return Dec.from_prec(rng.randrange(99), 2)


def randomized_gen_state(rng: random.Random) -> GenesisState:
    """Return a mint genesis state with a randomly chosen inflation."""
    params = Params(inflation=gen_inflation(rng), mint_denom=MINT_DENOM)
    state = GenesisState(default_minter(), params)
    _log.info(
        "Selected randomly generated %s parameters:\n%s",
        MODULE_NAME,
        json.dumps(state.to_dict(), indent=1),
    )
    return state


def param_changes(rng: random.Random) -> list[ParamChange]:
    """Return the parameters that simulated proposals may modify."""
    return [
        ParamChange(
            MODULE_NAME,
            KEY_INFLATION.decode(),
            lambda r: f'"{gen_inflation(r)}"',
        )
    ]