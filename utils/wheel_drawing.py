"""Wheel image and spin animation rendering using Pillow."""

from __future__ import annotations

import io
import logging
import math

from PIL import Image, ImageChops, ImageColor, ImageDraw, ImageFont
from pilmoji import Pilmoji

import config
from domain.models.item import Item
from infrastructure.tick_scheduler import ManualClock
from services.wheel_service import WheelService

logger = logging.getLogger("spinwheel.utils.drawing")

# Cached fonts for performance (loaded once, not per frame)
_CACHED_FONTS: dict[str, ImageFont.FreeTypeFont | ImageFont.ImageFont] = {}

# Cache for pre-rendered emoji text images (avoids pilmoji calls per GIF frame)
_CACHED_EMOJI_TEXT: dict[tuple[str, int, str], Image.Image] = {}

# Item images by path; None marks a path that failed to load
_CACHED_ITEM_IMAGES: dict[str, Image.Image | None] = {}

# Sector colors used when an item has no background_color of its own
DEFAULT_SECTOR_COLORS = [
    "#2d5a27",
    "#3498db",
    "#9b59b6",
    "#e67e22",
    "#c0392b",
    "#f1c40f",
    "#1f6dad",
    "#4d9a47",
]

BACKGROUND_COLOR = (30, 30, 35, 255)
POINTER_COLOR = "#e74c3c"
HIGHLIGHT_COLOR = "#f1c40f"


def _get_cached_font(size: int, bold: bool = False) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    """Get a cached font, loading it only on first access."""
    cache_key = f"{size}_{'bold' if bold else 'regular'}"
    if cache_key not in _CACHED_FONTS:
        try:
            font_name = "DejaVuSans-Bold.ttf" if bold else "DejaVuSans.ttf"
            font_path = f"/usr/share/fonts/truetype/dejavu/{font_name}"
            _CACHED_FONTS[cache_key] = ImageFont.truetype(font_path, size)
        except OSError:
            _CACHED_FONTS[cache_key] = ImageFont.load_default()
    return _CACHED_FONTS[cache_key]


def _has_emoji(text: str) -> bool:
    """Check if text contains emoji characters."""
    return any(ord(c) > 0x1F00 for c in text)


def _get_emoji_text_image(
    text: str, font: ImageFont.FreeTypeFont | ImageFont.ImageFont, size: int, fill: str = "#ffffff"
) -> Image.Image:
    """
    Pre-render emoji text to a transparent image, cached for performance.

    This avoids calling pilmoji for every GIF frame by caching the rendered result.
    """
    cache_key = (text, size, fill)
    if cache_key not in _CACHED_EMOJI_TEXT:
        temp_img = Image.new("RGBA", (size * 4, size * 2), (0, 0, 0, 0))
        with Pilmoji(temp_img) as pilmoji:
            pilmoji.text((0, 0), text, font=font, fill=fill)
        _CACHED_EMOJI_TEXT[cache_key] = temp_img
    return _CACHED_EMOJI_TEXT[cache_key]


def _to_pil_angle(wheel_angle: float) -> float:
    # Wheel angles have 0 at north; Pillow's 0 is at 3 o'clock. Both run clockwise.
    return wheel_angle - 90


def _pil_arc(angle) -> tuple[float, float]:
    start = _to_pil_angle(angle.start) % 360
    return start, start + angle.span


def _point_on_circle(center: float, radius: float, wheel_angle: float) -> tuple[float, float]:
    rad = math.radians(_to_pil_angle(wheel_angle))
    return center + radius * math.cos(rad), center + radius * math.sin(rad)


def _sector_color(wheel: WheelService, index: int) -> str:
    color = wheel.items[index].background_color
    return color or DEFAULT_SECTOR_COLORS[index % len(DEFAULT_SECTOR_COLORS)]


def _get_item_image(path: str) -> Image.Image | None:
    """Load an item image as RGBA, cached so GIF frames never reread the file."""
    if path not in _CACHED_ITEM_IMAGES:
        try:
            with Image.open(path) as source:
                _CACHED_ITEM_IMAGES[path] = source.convert("RGBA")
        except OSError as exc:
            logger.warning(f"Could not load item image {path}: {exc}")
            _CACHED_ITEM_IMAGES[path] = None
    return _CACHED_ITEM_IMAGES[path]


def _draw_item_image(
    img: Image.Image, item: Item, angle, box: list[float], center: float, radius: float
) -> Image.Image:
    """
    Composite an item's image onto its sector.

    The image is centered at ``image_radius`` along the sector's center line,
    turned with the sector plus ``image_rotation``, sized relative to a 500px
    wheel and clipped to the sector.
    """
    source = _get_item_image(item.image)
    if source is None:
        return img

    scale = img.width / 500 * item.image_scale
    picture = source.resize(
        (max(1, round(source.width * scale)), max(1, round(source.height * scale))), Image.Resampling.LANCZOS
    )
    # Pillow rotates anticlockwise
    picture = picture.rotate(-(angle.center + item.image_rotation), expand=True, resample=Image.BICUBIC)
    if item.image_opacity < 1:
        picture.putalpha(picture.getchannel("A").point(lambda a: round(a * item.image_opacity)))

    x, y = _point_on_circle(center, radius * item.image_radius, angle.center)
    layer = Image.new("RGBA", img.size, (0, 0, 0, 0))
    layer.paste(picture, (round(x - picture.width / 2), round(y - picture.height / 2)), picture)

    sector = Image.new("L", img.size, 0)
    ImageDraw.Draw(sector).pieslice(box, *_pil_arc(angle), fill=255)
    layer.putalpha(ImageChops.multiply(layer.getchannel("A"), sector))
    return Image.alpha_composite(img, layer)


def _draw_label(
    img: Image.Image, text: str, position: tuple[float, float], font, font_size: int, fill: str
) -> Image.Image:
    """Draw a centered label with a shadow; emoji labels go through pilmoji."""
    text_x, text_y = position
    if _has_emoji(text):
        emoji_img = _get_emoji_text_image(text, font, font_size, fill)
        temp = Image.new("RGBA", img.size, (0, 0, 0, 0))
        temp.paste(emoji_img, (int(text_x - emoji_img.width / 2), int(text_y - emoji_img.height / 2)), emoji_img)
        return Image.alpha_composite(img, temp)

    draw = ImageDraw.Draw(img)
    bbox = draw.textbbox((0, 0), text, font=font)
    text_w = bbox[2] - bbox[0]
    text_h = bbox[3] - bbox[1]
    draw.text((text_x - text_w / 2 + 1, text_y - text_h / 2 + 1), text, fill="#000000", font=font)
    draw.text((text_x - text_w / 2, text_y - text_h / 2), text, fill=fill, font=font)
    return img


def _draw_pointer(draw: ImageDraw.ImageDraw, center: float, radius: float, pointer_angle: float) -> None:
    """Draw the pointer on the rim at ``pointer_angle``, tip facing the center."""
    tip = _point_on_circle(center, radius - 18, pointer_angle)
    left = _point_on_circle(center, radius + 14, pointer_angle - 6)
    right = _point_on_circle(center, radius + 14, pointer_angle + 6)
    draw.polygon([tip, left, right], fill=POINTER_COLOR, outline="#ffffff", width=2)


def _draw_drag_samples(draw: ImageDraw.ImageDraw, wheel: WheelService, center: float, scale: float) -> None:
    """Debug overlay: one dot per retained drag sample, newest most opaque."""
    geometry = wheel.geometry
    samples = wheel.drag_samples
    for i, sample in enumerate(samples):
        alpha = int(255 * (1 - i / max(len(samples), 1)))
        x = center + (sample.x - geometry.center_x) * scale
        y = center + (sample.y - geometry.center_y) * scale
        draw.ellipse([x - 4, y - 4, x + 4, y + 4], fill=(255, 255, 255, alpha))


def create_wheel_image(
    wheel: WheelService,
    size: int | None = None,
    selected_idx: int | None = None,
) -> Image.Image:
    """
    Render the wheel at its current rotation.

    Args:
        wheel: Wheel whose item angles and rotation are drawn
        size: Image size in pixels (square)
        selected_idx: Index of an item to highlight (for result display)

    Returns:
        PIL Image object
    """
    size = size or config.WHEEL_IMAGE_SIZE
    img = Image.new("RGBA", (size, size), BACKGROUND_COLOR)
    draw = ImageDraw.Draw(img)

    center = size / 2
    radius = size / 2 * wheel.settings.radius - 14
    inner_radius = radius / 6
    font_size = max(12, size // 32)
    font = _get_cached_font(font_size, bold=True)
    box = [center - radius, center - radius, center + radius, center + radius]

    if not wheel.items:
        draw.ellipse(box, fill="#4a4a4a", outline="#ffffff", width=2)

    for i, angle in enumerate(wheel.angles):
        fill = _sector_color(wheel, i)
        if i == selected_idx:
            # Brighten the selected sector
            fill = tuple(min(255, c + 40) for c in ImageColor.getrgb(fill)[:3])
        draw.pieslice(
            box,
            *_pil_arc(angle),
            fill=fill,
            outline="#ffffff",
            width=2,
        )

    for angle, item in zip(wheel.angles, wheel.items):
        if item.image:
            img = _draw_item_image(img, item, angle, box, center, radius)

    # Labels are drawn after all sectors so neighbours never paint over them
    for angle, item in zip(wheel.angles, wheel.items):
        if not item.label:
            continue
        position = _point_on_circle(center, radius * 0.68, angle.center)
        img = _draw_label(img, item.label, position, font, font_size, item.label_color or "#ffffff")

    draw = ImageDraw.Draw(img)

    # Highlight the selected item on top of everything else
    if selected_idx is not None and 0 <= selected_idx < len(wheel.angles):
        angle = wheel.angles[selected_idx]
        draw.pieslice(
            box,
            *_pil_arc(angle),
            outline=HIGHLIGHT_COLOR,
            width=5,
        )

    draw.ellipse(
        [center - inner_radius, center - inner_radius, center + inner_radius, center + inner_radius],
        fill="#2c3e50",
        outline=HIGHLIGHT_COLOR,
        width=3,
    )
    _draw_pointer(draw, center, radius, wheel.settings.pointer_angle)

    if wheel.settings.debug and wheel.geometry.radius > 0:
        # Drag samples are in viewport pixels; map them onto this image
        scale = radius / wheel.geometry.radius
        _draw_drag_samples(draw, wheel, center, scale)

    return img


def wheel_image_to_bytes(img: Image.Image) -> io.BytesIO:
    """Convert PIL Image to a PNG bytes buffer."""
    buffer = io.BytesIO()
    img.save(buffer, format="PNG")
    buffer.seek(0)
    return buffer


def render_spin_frames(
    wheel: WheelService,
    clock: ManualClock,
    size: int | None = None,
    frame_ms: int | None = None,
    max_frames: int = 1500,
) -> list[Image.Image]:
    """
    Drive a wheel that is already spinning until it rests, rendering every frame.

    ``clock`` must be the clock the wheel was built with; it is advanced by
    ``frame_ms`` per frame. The final frame highlights the item under the pointer.
    """
    frame_ms = frame_ms or config.WHEEL_GIF_FRAME_MS
    frames = [create_wheel_image(wheel, size)]
    while wheel.is_spinning and len(frames) < max_frames:
        clock.advance(frame_ms)
        wheel.advance(clock())
        resting = not wheel.is_spinning
        frames.append(create_wheel_image(wheel, size, selected_idx=wheel.current_index if resting else None))
    return frames


def create_spin_gif(
    wheel: WheelService,
    clock: ManualClock,
    size: int | None = None,
    frame_ms: int | None = None,
    hold_ms: int = 3000,
) -> io.BytesIO:
    """
    Create an animated GIF of a spinning wheel coming to rest.

    Start the spin (``spin``, ``spin_to`` or ``spin_to_item``) before calling.

    Returns:
        BytesIO buffer containing the GIF data
    """
    frame_ms = frame_ms or config.WHEEL_GIF_FRAME_MS
    frames = [
        frame.convert("RGB").convert("P", palette=Image.Palette.ADAPTIVE, colors=256)
        for frame in render_spin_frames(wheel, clock, size, frame_ms)
    ]
    durations = [frame_ms] * (len(frames) - 1) + [hold_ms]

    buffer = io.BytesIO()
    frames[0].save(
        buffer,
        format="GIF",
        save_all=True,
        append_images=frames[1:],
        duration=durations,
        loop=1,  # Play once, hold on final frame
    )
    buffer.seek(0)
    return buffer
