"""Padding policy for engines."""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from enum import Enum

from .exceptions import ValidationError

__all__ = ["DecodePaddingMode", "EngineConfig", "PAD", "NO_PAD"]


class DecodePaddingMode(Enum):
    """
    How the decoder treats pad symbols at the end of input.

    Attributes
    ----------
        REQUIRE_CANONICAL: The final group must carry exactly the pad count
            RFC 4648 prescribes (``Zg==``, ``Zm8=``). Unpadded tails are
            rejected.

        ALLOW_NONE: Padding may be left off entirely. When present it must
            be the canonical count, so ``Zg==`` and ``Zg`` decode but ``Zg=``
            does not.

        REQUIRE_NONE: Any pad symbol is rejected.

        INDIFFERENT: Canonical, partial, and absent padding are all accepted.
            Structure is still validated: pads after a complete group or more
            than two pads are errors.
    """

    REQUIRE_CANONICAL = "require_canonical"
    ALLOW_NONE = "allow_none"
    REQUIRE_NONE = "require_none"
    INDIFFERENT = "indifferent"

    @property
    def allows_padding(self) -> bool:
        """True if some padded input can be accepted under this mode."""
        return self is not DecodePaddingMode.REQUIRE_NONE

    @property
    def requires_pad_symbol(self) -> bool:
        """True if the mode is only meaningful for an alphabet with a pad symbol."""
        return self in (DecodePaddingMode.REQUIRE_CANONICAL, DecodePaddingMode.ALLOW_NONE)


@dataclass(frozen=True, slots=True)
class EngineConfig:
    r"""
    Encode and decode behavior of an Engine.

    EngineConfig is immutable. Derive variations with ``.override()``:

        >>> strict = EngineConfig()
        >>> lenient = strict.override(decode_allow_trailing_bits=True)

    Both canonicality checks are explicit settings on every engine. The
    defaults are strict; loosening either one is a deliberate choice made
    with ``override()`` or keyword arguments.

    Attributes
    ----------
        encode_padding: Emit pad symbols so every encoded group has 4
            symbols. Default is True.

        decode_padding_mode: How pad symbols are treated when decoding.
            Default is ``DecodePaddingMode.REQUIRE_CANONICAL``.

        decode_allow_trailing_bits: Accept nonzero unused bits in the last
            symbol of a 2- or 3-symbol tail group. Default is False, which
            rejects such input with InvalidLastSymbolError. Turning it on lets
            several different strings decode to the same bytes.
    """

    encode_padding: bool = True
    decode_padding_mode: DecodePaddingMode = DecodePaddingMode.REQUIRE_CANONICAL
    decode_allow_trailing_bits: bool = False

    def __post_init__(self) -> None:
        for name in ("encode_padding", "decode_allow_trailing_bits"):
            value = getattr(self, name)
            if not isinstance(value, bool):
                raise ValidationError(
                    f"{name} must be bool, got {type(value).__name__}",
                    code="INVALID_ARGUMENT",
                    details={"param": name, "type": type(value).__name__},
                )
        if not isinstance(self.decode_padding_mode, DecodePaddingMode):
            try:
                mode = DecodePaddingMode(self.decode_padding_mode)
            except ValueError:
                valid = [m.value for m in DecodePaddingMode]
                raise ValidationError(
                    f"decode_padding_mode must be one of {valid}, "
                    f"got {self.decode_padding_mode!r}",
                    code="INVALID_ARGUMENT",
                    details={"param": "decode_padding_mode", "valid": valid},
                ) from None
            # Accept the string form ("indifferent") as well as the member
            object.__setattr__(self, "decode_padding_mode", mode)

    def override(self, **changes: object) -> EngineConfig:
        """
        Return a copy with the given fields replaced.

        Raises
        ------
        ValidationError
            If a field name is unknown or a value is invalid.
        """
        known = {f.name for f in fields(self)}
        unknown = sorted(set(changes) - known)
        if unknown:
            raise ValidationError(
                f"Unknown EngineConfig fields: {', '.join(unknown)}",
                code="INVALID_ARGUMENT",
                details={"unknown": unknown, "valid": sorted(known)},
            )
        return replace(self, **changes)

    def describe(self) -> str:
        """Short label for logs, e.g. ``pad/require_canonical/strict``."""
        return "/".join(
            (
                "pad" if self.encode_padding else "no_pad",
                self.decode_padding_mode.value,
                "lenient" if self.decode_allow_trailing_bits else "strict",
            )
        )


# Padded output, canonical padding required on input
PAD = EngineConfig()

# Unpadded output, padding rejected on input
NO_PAD = EngineConfig(
    encode_padding=False,
    decode_padding_mode=DecodePaddingMode.REQUIRE_NONE,
)
