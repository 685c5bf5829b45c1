"""IDNA transcoding for host names.

Thin wrapper around the ``idna`` package configured for lookup mapping
(UTS #46) with transitional processing. Current ``idna`` releases no longer
honour the transitional flag, so the four UTS #46 deviation characters are
folded here before encoding: ``ß`` to ``ss``, ``ς`` to ``σ``, and the zero
width joiners are removed.
"""

import idna

# UTS #46 deviation characters and their transitional mappings
DEVIATIONS = str.maketrans({
    "\u00df": "ss",
    "\u03c2": "\u03c3",
    "\u200c": None,
    "\u200d": None,
})


class IDNATranscoder:
    """Stateless Unicode to ASCII-compatible host transcoder."""

    def __init__(self, uts46: bool = True, transitional: bool = True):
        self.uts46 = uts46
        self.transitional = transitional

    def to_ascii(self, host: str) -> str:
        """Return the punycode form of *host*.

        Raises ``idna.IDNAError`` (or ``UnicodeError``) when the host cannot
        be transcoded.
        """
        if self.transitional:
            host = host.translate(DEVIATIONS)
        encoded = idna.encode(host, uts46=self.uts46)
        return encoded.decode("ascii")

    def __repr__(self) -> str:
        return f"IDNATranscoder(uts46={self.uts46}, transitional={self.transitional})"
