# devlog/infra/jwt/signing_key.py
from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass, field

# HS256 requires at least 256 bits of key material
MIN_KEY_BYTES = 32


@dataclass(frozen=True, slots=True)
class SigningKey:
    """
    Immutable symmetric key shared by every token kind.

    Built once at startup and handed to :class:`TokenCodec`; rotating the key
    means building a new codec around a new instance.

    .. note::
       ``repr`` is redacted so the secret never reaches logs.
    """

    material: bytes = field(repr=False)

    def __post_init__(self) -> None:
        if len(self.material) < MIN_KEY_BYTES:
            raise ValueError(f"Signing key must be at least {MIN_KEY_BYTES} bytes.")

    @classmethod
    def from_base64(cls, encoded: str) -> SigningKey:
        """
        Decode base64 key material from configuration.

        :param encoded: Standard (or urlsafe) base64 text.
        :raises ValueError: If the text is not base64 or the key is too short.
        """
        text = (encoded or "").strip()
        if not text:
            raise ValueError("Signing key is not configured.")
        altchars = b"-_" if ("-" in text or "_" in text) else None
        try:
            raw = base64.b64decode(text, altchars=altchars, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise ValueError("Signing key is not valid base64.") from exc
        return cls(material=raw)

    def __str__(self) -> str:
        return "SigningKey(***)"
