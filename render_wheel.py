"""
Render a wheel spin to an animated GIF.

Example:
    python render_wheel.py --labels "5,10,25,50,100,BANKRUPT" --weights "3,3,2,1,1,2" \
        --target 4 --output spin.gif
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List

import config
from domain.errors import InvalidConfigurationError
from domain.models.item import Item
from domain.models.settings import WheelSettings
from infrastructure.tick_scheduler import ManualClock
from services.wheel_service import WheelService
from utils.easing import EASING_FUNCTIONS, get_easing
from utils.wheel_drawing import create_spin_gif

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger("spinwheel")


def _split(raw: str) -> list[str]:
    return [part.strip() for part in raw.split(",") if part.strip()]


def build_items(labels: str, weights: str | None) -> list[Item]:
    names = _split(labels)
    if weights is None:
        return [Item(label=name) for name in names]

    values = [float(w) for w in _split(weights)]
    if len(values) != len(names):
        raise InvalidConfigurationError(f"Got {len(names)} labels but {len(values)} weights")
    return [Item(label=name, weight=weight) for name, weight in zip(names, values)]


def main(argv: List[str]) -> int:
    parser = argparse.ArgumentParser(description="Spin a wheel to an item and write the animation as a GIF.")
    parser.add_argument("--labels", required=True, help="Comma-separated item labels")
    parser.add_argument("--weights", help="Comma-separated item weights (default: all 1)")
    parser.add_argument("--target", type=int, help="Index of the item to land on (default: free spin)")
    parser.add_argument("--speed", type=float, default=None, help="Free-spin speed in deg/s when no target is given")
    parser.add_argument("--duration", type=int, default=config.WHEEL_SPIN_DURATION_MS, help="Animation length (ms)")
    parser.add_argument("--revolutions", type=int, default=config.WHEEL_SPIN_REVOLUTIONS, help="Full turns before landing")
    parser.add_argument("--anticlockwise", action="store_true", help="Spin anticlockwise")
    parser.add_argument("--random-angle", action="store_true", help="Land anywhere inside the target item")
    parser.add_argument("--easing", default="sin_out", choices=sorted(EASING_FUNCTIONS), help="Easing curve")
    parser.add_argument("--pointer-angle", type=float, default=config.WHEEL_POINTER_ANGLE, help="Pointer angle (deg)")
    parser.add_argument("--size", type=int, default=config.WHEEL_IMAGE_SIZE, help="Image size in pixels")
    parser.add_argument("--output", default="wheel.gif", help="Output GIF path")
    args = parser.parse_args(argv)

    clock = ManualClock()
    try:
        wheel = WheelService(
            build_items(args.labels, args.weights),
            WheelSettings(pointer_angle=args.pointer_angle),
            clock=clock,
        )
        direction = -1 if args.anticlockwise else 1
        if args.target is not None:
            wheel.spin_to_item(
                args.target,
                duration=args.duration,
                spin_to_center=not args.random_angle,
                number_of_revolutions=args.revolutions,
                direction=direction,
                easing=get_easing(args.easing),
            )
        else:
            speed = args.speed if args.speed is not None else wheel.settings.rotation_speed_max
            wheel.spin(speed * direction)
    except ValueError as exc:
        logger.error(f"Invalid wheel configuration: {exc}")
        return 2

    buffer = create_spin_gif(wheel, clock, size=args.size)
    with open(args.output, "wb") as f:
        f.write(buffer.getvalue())

    item = wheel.items[wheel.current_index] if wheel.current_index is not None else None
    logger.info(f"Wrote {args.output}; landed on {item.label if item else 'nothing'!r}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
