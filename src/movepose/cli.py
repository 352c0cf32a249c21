"""CLI for movepose: ``movepose run`` and ``movepose info``."""

import argparse
import json
import logging
import sys
from dataclasses import replace
from typing import Iterator, Optional, Union

import numpy as np

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="movepose",
        description="MoveNet pose detection with region tracking",
    )
    sub = parser.add_subparsers(dest="command")

    # movepose run
    run_p = sub.add_parser("run", help="Detect poses on a video or camera")
    run_p.add_argument(
        "--input", "-i",
        required=True,
        help="Input source: file path or camera index (int)",
    )
    run_p.add_argument(
        "--model",
        default=None,
        help="MoveNet .onnx model (absolute or relative to the models dir)",
    )
    run_p.add_argument(
        "--config",
        default=None,
        help="YAML config file (flat or under a 'body' key)",
    )
    run_p.add_argument(
        "--max-frames",
        type=int,
        default=None,
        help="Stop after N processed frames",
    )
    run_p.add_argument(
        "--min-confidence",
        type=float,
        default=None,
        help="Minimum keypoint / pose score",
    )
    run_p.add_argument(
        "--max-detected",
        type=int,
        default=None,
        help="Maximum poses per frame",
    )
    run_p.add_argument(
        "--skip-frames",
        type=int,
        default=None,
        help="Frames tracked on cached regions before a full-frame refresh",
    )
    run_p.add_argument(
        "--tracking",
        action="store_true",
        help="Enable region tracking between frames",
    )
    run_p.add_argument(
        "--json",
        action="store_true",
        help="Print one JSON object per frame",
    )
    run_p.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Verbose output",
    )

    # movepose info
    info_p = sub.add_parser("info", help="Show the model descriptor")
    info_p.add_argument(
        "--model",
        default="movenet/lightning.onnx",
        help="MoveNet .onnx model",
    )
    info_p.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Verbose output",
    )

    return parser


def _resolve_input(input_str: str) -> Union[int, str]:
    """Resolve --input to a source path or camera index."""
    try:
        return int(input_str)
    except ValueError:
        return input_str


def _build_config(args: argparse.Namespace):
    """Merge the YAML config (if any) with command line overrides."""
    from movepose.config import PoseConfig

    config = PoseConfig.from_yaml(args.config) if args.config else PoseConfig()

    overrides = {}
    if args.model is not None:
        overrides["model_path"] = args.model
    if args.min_confidence is not None:
        overrides["min_confidence"] = args.min_confidence
    if args.max_detected is not None:
        overrides["max_detected"] = args.max_detected
    if args.skip_frames is not None:
        overrides["skip_frames"] = args.skip_frames
    if args.tracking:
        overrides["skip_frame"] = True
    if args.verbose:
        overrides["debug"] = True

    return replace(config, **overrides) if overrides else config


def _read_frames(source: Union[int, str], max_frames: Optional[int] = None) -> Iterator[np.ndarray]:
    """Yield RGB frames from a video file or camera."""
    import cv2

    cap = cv2.VideoCapture(source)
    if not cap.isOpened():
        raise ValueError(f"Cannot open video source: {source}")

    try:
        count = 0
        while max_frames is None or count < max_frames:
            ret, data = cap.read()
            if not ret:
                break
            yield cv2.cvtColor(data, cv2.COLOR_BGR2RGB)
            count += 1
    finally:
        cap.release()


def _format_frame(frame_id: int, result) -> str:
    """One line summary of a FrameResult."""
    mode = "full" if result.full_frame else "tracked"
    scores = ", ".join(f"{p.score:.2f}" for p in result.poses)
    return (
        f"  frame={frame_id} poses={len(result.poses)} [{scores}] "
        f"mode={mode} regions={result.cached_regions}"
    )


def _cmd_run(args: argparse.Namespace) -> None:
    """Handle ``movepose run``."""
    from movepose.processor import FrameProcessor

    try:
        config = _build_config(args)
    except (ValueError, FileNotFoundError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    source = _resolve_input(args.input)
    processor = FrameProcessor(config=config)

    frame_count = 0
    with processor:
        if not processor.is_available:
            print("Error: pose model unavailable (see log)", file=sys.stderr)
            sys.exit(1)

        try:
            for frame_id, image in enumerate(_read_frames(source, args.max_frames)):
                result = processor.process(image)
                if args.json:
                    print(json.dumps({
                        "frame": frame_id,
                        "full_frame": result.full_frame,
                        "poses": [p.to_dict() for p in result.poses],
                    }))
                else:
                    print(_format_frame(frame_id, result))
                frame_count += 1
        except ValueError as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)

    if not args.json:
        print(f"\nDone: {frame_count} frames")


def _cmd_info(args: argparse.Namespace) -> None:
    """Handle ``movepose info``."""
    from movepose.backends.onnx_movenet import OnnxMoveNetBackend
    from movepose.errors import MovePoseError

    backend = OnnxMoveNetBackend(args.model)
    try:
        backend.initialize("cpu")
        descriptor = backend.descriptor
    except MovePoseError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    print(f"  name:       {descriptor.name}")
    print(f"  layout:     {descriptor.layout.value}")
    print(f"  input_size: {descriptor.input_size}")
    backend.cleanup()


def main():
    """Entry point for ``movepose`` CLI."""
    parser = _build_parser()
    args = parser.parse_args()

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    level = logging.DEBUG if getattr(args, "verbose", False) else logging.INFO
    logging.basicConfig(level=level)

    if args.command == "run":
        _cmd_run(args)
    elif args.command == "info":
        _cmd_info(args)


if __name__ == "__main__":
    main()
