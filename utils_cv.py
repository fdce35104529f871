import base64
import io

import numpy as np
from PIL import Image, ImageOps

import utils_config
from errors import RenderingUnavailable, UnsupportedFile
from utils_color import round_half_up

ACCEPTED_MIME_TYPES = ("image/jpeg", "image/png", "image/webp")
# Pillow format name -> mime
PIL_FORMATS = {"JPEG": "image/jpeg", "PNG": "image/png", "WEBP": "image/webp"}

def decode_data_url(data):
    """
    Split a ``data:<mime>;base64,<payload>`` string into (mime, bytes).
    Bare base64 is accepted too, in which case mime is None and the type is
    decided later by sniffing the bytes.
    """
    mime = None
    if "," in data:
        header, encoded = data.split(",", 1)
        if header.startswith("data:"):
            mime = header[5:].split(";", 1)[0].strip().lower() or None
    else:
        encoded = data

    try:
        raw = base64.b64decode(encoded, validate=True)
    except ValueError as e:
        raise UnsupportedFile(f"Upload is not valid base64: {e}", mime)

    if not raw:
        raise UnsupportedFile("Upload is empty", mime)
    if len(raw) > utils_config.MAX_UPLOAD_BYTES:
        raise UnsupportedFile(
            f"Upload is {len(raw)} bytes, limit is {utils_config.MAX_UPLOAD_BYTES}", mime)
    return mime, raw

def check_mime(mime):
    if mime not in ACCEPTED_MIME_TYPES:
        raise UnsupportedFile(f"Unsupported file type: {mime}", mime)

def load_image(raw, mime=None):
    """Decode bytes into an RGB PIL image. Alpha, if any, is dropped."""
    if mime is not None:
        check_mime(mime)

    try:
        img = Image.open(io.BytesIO(raw))
    except (OSError, Image.DecompressionBombError) as e:
        raise UnsupportedFile(f"Could not identify image: {e}", mime)

    sniffed = PIL_FORMATS.get(img.format)
    if sniffed is None:
        raise UnsupportedFile(f"Unsupported image format: {img.format}", mime)

    # Image.open only reads the header; the raster is decoded here
    try:
        img.load()
        # Upright as a browser would draw it
        img = ImageOps.exif_transpose(img)
        if img.mode == "I" or img.mode.startswith("I;16"):
            # 16-bit samples: scale to 8 bits instead of clipping
            img = img.convert("I").point(lambda v: v / 256).convert("L")
        rgb = img.convert("RGB")
    except (OSError, ValueError, SyntaxError) as e:
        raise RenderingUnavailable(f"Could not decode {sniffed} raster: {e}")

    w, h = rgb.size
    if w <= 0 or h <= 0:
        raise RenderingUnavailable(f"Image has no pixels ({w}x{h})")
    return rgb

def sampling_region(width, height):
    """
    Central strip as (x, y, w, h): middle 30% of the width, 80% of the height
    starting 10% down. Fractions truncate like a canvas readback, and each
    side is kept at least one pixel wide.
    """
    if width <= 0 or height <= 0:
        raise RenderingUnavailable(f"Image has no pixels ({width}x{height})")

    strip_w = width * utils_config.STRIP_WIDTH_RATIO
    x = int((width - strip_w) / 2)
    w = max(1, int(strip_w))
    y = int(height * utils_config.STRIP_TOP_RATIO)
    h = max(1, int(height * utils_config.STRIP_HEIGHT_RATIO))

    x = min(max(0, x), width - 1)
    y = min(max(0, y), height - 1)
    w = min(w, width - x)
    h = min(h, height - y)
    return x, y, w, h

def sample_color(image):
    """Average R, G and B over the sampling region of a PIL image or HxWxC array."""
    if isinstance(image, Image.Image):
        if image.mode != "RGB":
            image = image.convert("RGB")
        arr = np.asarray(image)
    else:
        arr = np.asarray(image)

    if arr.ndim != 3 or arr.shape[2] < 3:
        raise RenderingUnavailable(f"Expected an HxWx3 raster, got shape {arr.shape}")

    height, width = arr.shape[:2]
    x, y, w, h = sampling_region(width, height)
    region = arr[y:y + h, x:x + w, :3].astype(np.float64)
    means = region.reshape(-1, 3).mean(axis=0)
    return tuple(min(255, max(0, round_half_up(m))) for m in means)

def sample_image_bytes(raw, mime=None):
    return sample_color(load_image(raw, mime))
