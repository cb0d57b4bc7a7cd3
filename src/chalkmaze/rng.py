from __future__ import annotations

import hashlib
import logging
import random
import secrets
from typing import Union

logger = logging.getLogger(__name__)

Seed = Union[int, str, bytes, None]

# blake2b keys are limited to 64 bytes; longer master seeds are hashed down.
_MAX_KEY = 64
_PERSON = b"chalkmaze-rng-v1"


def seed_to_bytes(seed: Union[int, str, bytes]) -> bytes:
    """Canonical byte form of a user supplied seed.

    Ints (and "0x.." strings) become minimal big-endian bytes, so ``16`` and
    ``"0x10"`` name the same run. Other strings are UTF-8 encoded.
    """
    if isinstance(seed, bytes):
        return seed
    if isinstance(seed, bool):
        raise TypeError("Seed must not be a bool")
    if isinstance(seed, str):
        text = seed.strip()
        if text.lower().startswith("0x"):
            try:
                seed = int(text, 16)
            except ValueError:
                return text.encode("utf-8")
        else:
            return text.encode("utf-8")
    if isinstance(seed, int):
        if seed < 0:
            return seed.to_bytes(seed.bit_length() // 8 + 1, "big", signed=True)
        return seed.to_bytes((seed.bit_length() + 7) // 8 or 1, "big")
    raise TypeError(f"Unsupported seed type: {type(seed)!r}")


class RNGManager:
    """Per-run seed bank.

    Each (domain, level) pair gets its own 64-bit seed, keyed on the master
    seed, so the layout of level 3 is the same whether or not the player used
    the debug teleport on level 2.

        rngm = RNGManager(settings.seed)
        layout_seed = rngm.derive_seed("maze_layout", level)
        respawn_rng = rngm.context_rng("respawn", level)
    """

    def __init__(self, master_seed: Seed = None) -> None:
        if master_seed is None:
            self._master = secrets.token_bytes(16)
            logger.info("No master seed provided; generated random seed: %s", self._master.hex())
        else:
            self._master = seed_to_bytes(master_seed)
            logger.debug("Using master seed: %r", master_seed)
        key = self._master
        if len(key) > _MAX_KEY:
            key = hashlib.blake2b(key).digest()
        self._key = key

    @property
    def master_seed(self) -> bytes:
        return self._master

    def derive_seed(self, domain: str, *identifiers: object) -> int:
        """64-bit seed for ``domain`` ("maze_layout", "respawn", "torches")
        and identifiers such as the level number."""
        label = "/".join([domain, *(repr(i) for i in identifiers)]).encode("utf-8")
        digest = hashlib.blake2b(label, digest_size=8, key=self._key, person=_PERSON).digest()
        value = int.from_bytes(digest, "big")
        logger.debug("Derived seed %s -> %d", label.decode("utf-8"), value)
        return value

    def context_rng(self, domain: str, *identifiers: object) -> random.Random:
        return random.Random(self.derive_seed(domain, *identifiers))

    def get_master_seed_hex(self) -> str:
        return self._master.hex()


__all__ = [
    "RNGManager",
    "Seed",
    "seed_to_bytes",
]
