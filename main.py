import argparse
import logging
import os

import cv2
from tqdm import tqdm

from smartcapture.calculator import SmartCaptureCalculator
from smartcapture.config import capture_config_from, load_and_merge
from smartcapture.facemesh import FaceMeshConfig, FaceMeshDetector
from smartcapture.loader import find_images, iter_frames, load_frame
from smartcapture.types import CropRegion
from smartcapture.writers import ResultsWriter, build_record

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def setup_logging(level="INFO") -> None:
    """Root logger for a CLI run; an unknown level name means INFO."""
    if not isinstance(level, int):
        level = logging.getLevelName(str(level).upper())
    logging.basicConfig(level=level if isinstance(level, int) else logging.INFO, format=LOG_FORMAT)


def parse_args(argv=None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Smart face capture: pose-gated face crops")
    # Single-image mode
    p.add_argument("--image", help="Path to a single image (PNG/JPG)")
    p.add_argument("--save-debug", default=None, help="Optional path to save landmark/crop debug overlay (single-image mode)")
    # Batch mode
    p.add_argument("--input-dir", help="Directory of images to process (batch mode)")
    p.add_argument("--output-dir", help="Directory to write crops, JSON indices and summary")
    p.add_argument("--max-files", type=int, default=None, help="Optional max files to process (for testing)")
    # Capture overrides
    p.add_argument("--max-captures", type=int, default=None, help="Capture quota for the session")
    p.add_argument("--padding", type=float, default=None, help="Crop padding fraction")
    p.add_argument("--strategy", choices=["ear_depth", "eye_asymmetry"], default=None, help="Pose estimation strategy")
    # Config
    p.add_argument("--config", default=None, help="Optional YAML config path")
    p.add_argument("--log-level", default=None, help="Override log level (e.g., INFO, WARNING)")
    return p.parse_args(argv)


def build_overrides(args: argparse.Namespace) -> dict:
    cli_overrides = {"paths": {}, "runtime": {}, "capture": {}}
    if args.input_dir:
        cli_overrides["paths"]["input_dir"] = args.input_dir
    if args.output_dir:
        cli_overrides["paths"]["output_dir"] = args.output_dir
    if args.max_files is not None:
        cli_overrides["runtime"]["max_files"] = args.max_files
    if args.log_level:
        cli_overrides["runtime"]["log_level"] = args.log_level
    if args.max_captures is not None:
        cli_overrides["capture"]["max_captures"] = args.max_captures
    if args.padding is not None:
        cli_overrides["capture"]["padding"] = args.padding
    if args.strategy:
        cli_overrides["capture"]["pose_strategy"] = args.strategy
    return cli_overrides


def draw_debug(image_bgr, landmarks, region: CropRegion, out_path: str):
    vis = image_bgr.copy()
    h, w = vis.shape[:2]
    # Draw a subset of landmarks for visibility
    for x, y, _ in landmarks[::10]:
        cv2.circle(vis, (int(x * w), int(y * h)), 1, (0, 255, 0), -1)
    if region is not None:
        cv2.rectangle(vis, (region.x, region.y), (region.x + region.width, region.y + region.height), (0, 0, 255), 2)
    cv2.imwrite(out_path, vis)


def run_single(args: argparse.Namespace, cfg: dict) -> None:
    image, _ = load_frame(args.image)
    if image is None:
        raise SystemExit(f"Failed to read image: {args.image}")

    with FaceMeshDetector(FaceMeshConfig.from_dict(cfg.get("mediapipe"))) as det:
        faces = det.detect(image)

    calc = SmartCaptureCalculator(capture_config_from(cfg))
    result = calc.process(image, faces)
    print("Status:", result.status)
    if result.pose is not None:
        print("Angles (deg): yaw=%.2f pitch=%.2f roll=%.2f" % (result.pose.yaw, result.pose.pitch, result.pose.roll))
    if result.region is not None:
        print("Crop region:", result.region.as_tuple())

    if args.save_debug and faces:
        draw_debug(image, faces[0], result.region, str(args.save_debug))
        print("Saved debug overlay:", args.save_debug)


def run_batch(cfg: dict) -> None:
    input_dir = cfg.get("paths", {}).get("input_dir")
    output_dir = cfg.get("paths", {}).get("output_dir")
    if not input_dir or not output_dir:
        raise SystemExit("Batch mode requires --input-dir and --output-dir (or set in config)")

    paths = find_images(input_dir, cfg.get("runtime", {}).get("max_files"))
    if not paths:
        print("No images found in", input_dir)
        return

    calc = SmartCaptureCalculator(capture_config_from(cfg))
    writer = ResultsWriter(output_dir, cfg)

    # One session across the batch: frames are evaluated in order until the quota is reached
    with FaceMeshDetector(FaceMeshConfig.from_dict(cfg.get("mediapipe"))) as det:
        for p, image, meta in tqdm(iter_frames(paths), total=len(paths), desc="Processing", unit="img"):
            if calc.session.exhausted:
                break
            result = calc.process(image, det.detect(image))
            crop_path = writer.save_crop(p, result)
            writer.add(build_record(meta, result, crop_path))

    summary = writer.finalize()
    print("Summary:", summary)


def main(argv=None):
    # Reduce TF/MediaPipe verbosity if desired
    os.environ.setdefault("TF_CPP_MIN_LOG_LEVEL", "2")

    args = parse_args(argv)
    cfg = load_and_merge(args.config, build_overrides(args))
    setup_logging(cfg.get("runtime", {}).get("log_level", "INFO"))

    if args.image and not args.input_dir:
        run_single(args, cfg)
        return
    run_batch(cfg)


if __name__ == "__main__":
    main()
