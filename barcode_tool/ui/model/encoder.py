"""Symbol encoding for the barcode page.

The actual symbol encoders are third-party libraries:

- Code 128 through ``python-barcode`` (its module pattern, drawn with Pillow),
- QR Code through ``qrcode``,
- Data Matrix through ``pylibdmtx`` (needs the native ``libdmtx``).

:func:`encode_symbol` hides them behind one call that takes the content,
a :class:`SymbolFormat` and an :class:`EncodingOptions` and returns a
Pillow image fitted to the requested canvas, raising :class:`EncodeError`
for anything the library rejects.  :func:`render_barcode` is what the UI
calls: it turns every outcome into a :class:`RenderResult` value.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable

from PIL import Image, ImageOps

import barcode
import qrcode
import qrcode.constants


class EncodeError(Exception):
    """Raised when content cannot be encoded in the requested format."""


class SymbolFormat(Enum):
    """Supported symbol formats, in format-selector order."""

    CODE_128 = "Code128"
    QR_CODE = "QRCode"
    DATA_MATRIX = "DataMatrix"

    @classmethod
    def from_index(cls, index: int) -> "SymbolFormat":
        """Return the format shown at selector *index* (Code 128 when out of range)."""
        members = list(cls)
        if 0 <= index < len(members):
            return members[index]
        return cls.CODE_128


class SymbolShapeHint(Enum):
    NONE = "ShapeAuto"
    FORCE_SQUARE = "SquareAuto"
    FORCE_RECTANGLE = "RectAuto"


@dataclass(frozen=True)
class EncodingOptions:
    """Canvas and rendering options handed to the encoder."""

    width: int
    height: int
    margin: int = 0
    pure_barcode: bool = True
    symbol_shape: SymbolShapeHint = SymbolShapeHint.NONE


def build_encoding_options(fmt: SymbolFormat) -> EncodingOptions:
    """Return the options used to render *fmt*.

    Code 128 gets a wide canvas so dense, long strings keep legible bars.
    Anything that is neither Data Matrix nor Code 128 uses the QR options.
    """
    if fmt is SymbolFormat.DATA_MATRIX:
        return EncodingOptions(
            width=500,
            height=500,
            margin=0,
            pure_barcode=True,
            symbol_shape=SymbolShapeHint.FORCE_SQUARE,
        )
    if fmt is SymbolFormat.CODE_128:
        return EncodingOptions(width=1500, height=400, margin=0, pure_barcode=True)
    return EncodingOptions(width=500, height=500, margin=0, pure_barcode=True)


# -----------------------------------------------------------------------------
# Library writers
# -----------------------------------------------------------------------------


def _write_code128(content: str, options: EncodingOptions) -> Image.Image:
    # One pixel per module, taken from the bar pattern itself; the canvas
    # fit scales by whole modules afterwards.
    barcode_class = barcode.get_barcode_class("code128")
    modules = barcode_class(content).build()[0]
    image = Image.new("L", (len(modules), 1), 255)
    image.putdata([0 if module == "1" else 255 for module in modules])
    return image


def _write_qr_code(content: str, options: EncodingOptions) -> Image.Image:
    qr = qrcode.QRCode(
        version=None,
        error_correction=qrcode.constants.ERROR_CORRECT_L,
        box_size=1,
        border=0,
    )
    qr.add_data(content)
    qr.make(fit=True)
    return qr.make_image(fill_color="black", back_color="white").get_image()


def _write_data_matrix(content: str, options: EncodingOptions) -> Image.Image:
    # Imported here: pylibdmtx loads the native libdmtx at import time.
    from pylibdmtx.pylibdmtx import encode as dmtx_encode

    encoded = dmtx_encode(content.encode("utf-8"), size=options.symbol_shape.value)
    return Image.frombytes("RGB", (encoded.width, encoded.height), encoded.pixels)


_WRITERS: dict[SymbolFormat, Callable[[str, EncodingOptions], Image.Image]] = {
    SymbolFormat.CODE_128: _write_code128,
    SymbolFormat.QR_CODE: _write_qr_code,
    SymbolFormat.DATA_MATRIX: _write_data_matrix,
}


# -----------------------------------------------------------------------------
# Canvas fitting
# -----------------------------------------------------------------------------


def _trim_quiet_zone(image: Image.Image) -> Image.Image:
    """Crop *image* to the bounding box of its dark modules."""
    gray = image.convert("L")
    bbox = ImageOps.invert(gray).getbbox()
    return gray.crop(bbox) if bbox else gray


def _fit_to_canvas(image: Image.Image, fmt: SymbolFormat, options: EncodingOptions) -> Image.Image:
    """Scale *image* by whole modules and centre it on the requested canvas.

    Linear symbols are stretched vertically to the full canvas height.  A
    symbol larger than the canvas is kept at one pixel per module and the
    canvas grows to hold it.
    """
    src_w, src_h = image.size
    if fmt is SymbolFormat.CODE_128:
        factor = max(1, options.width // src_w)
        scaled = image.resize((src_w * factor, max(src_h, options.height)), Image.NEAREST)
    else:
        factor = max(1, min(options.width // src_w, options.height // src_h))
        scaled = image.resize((src_w * factor, src_h * factor), Image.NEAREST)

    canvas = Image.new(
        "L",
        (max(options.width, scaled.width), max(options.height, scaled.height)),
        255,
    )
    canvas.paste(
        scaled,
        ((canvas.width - scaled.width) // 2, (canvas.height - scaled.height) // 2),
    )
    if options.margin > 0:
        canvas = ImageOps.expand(canvas, border=options.margin, fill=255)
    return canvas


def encode_symbol(
    content: str,
    fmt: SymbolFormat,
    options: EncodingOptions | None = None,
) -> Image.Image:
    """Encode *content* as *fmt* and return a grayscale Pillow image.

    Raises
    ------
    EncodeError
        The format is unsupported, or the encoding library rejected the
        content (illegal characters, too long for the symbol, missing
        native library).
    """
    if options is None:
        options = build_encoding_options(fmt)
    writer = _WRITERS.get(fmt)
    if writer is None:
        raise EncodeError(f"Unsupported symbol format: {fmt!r}")
    try:
        symbol = writer(content, options)
    except Exception as exc:
        raise EncodeError(f"{fmt.value} encoding failed: {exc}") from exc
    if options.margin == 0:
        symbol = _trim_quiet_zone(symbol)
    else:
        symbol = symbol.convert("L")
    return _fit_to_canvas(symbol, fmt, options)


# -----------------------------------------------------------------------------
# Rendering
# -----------------------------------------------------------------------------


@dataclass(frozen=True)
class RenderResult:
    """Outcome of a render request.

    ``image`` is None with no ``error`` when the display should be cleared
    (empty text).  When ``error`` is set the caller keeps its previous image.
    """

    image: Image.Image | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


Encoder = Callable[[str, SymbolFormat, EncodingOptions], Image.Image]


def render_barcode(
    text: str,
    fmt: SymbolFormat,
    encoder: Encoder = encode_symbol,
) -> RenderResult:
    """Render *text* in *fmt*, reporting encoder failures as a value."""
    if not text:
        return RenderResult()
    options = build_encoding_options(fmt)
    try:
        image = encoder(text, fmt, options)
    except EncodeError as exc:
        logging.debug("Render of %r as %s failed: %s", text, fmt.value, exc)
        return RenderResult(error=str(exc))
    return RenderResult(image=image)


__all__ = [
    "EncodeError",
    "EncodingOptions",
    "RenderResult",
    "SymbolFormat",
    "SymbolShapeHint",
    "build_encoding_options",
    "encode_symbol",
    "render_barcode",
]
