"""Codec options."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CodecOptions:
    """Knobs shared by the encoder and the decoder.

    - ``max_depth``: deepest container nesting ``decode`` accepts.
    - ``strict_scalars``: raise instead of turning an unparseable ``:``
      token into null.
    - ``trim``: drop the trailing run of ``;`` from top-level output.
    """

    max_depth: int = 256
    strict_scalars: bool = False
    trim: bool = True

    def __post_init__(self) -> None:
        if self.max_depth < 1:
            raise ValueError(f"max_depth must be positive, got {self.max_depth}")


DEFAULT_OPTIONS = CodecOptions()
