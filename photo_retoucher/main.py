# Command-line entry point
import argparse
import sys

from photo_retoucher.config import settings
from photo_retoucher.io import image_saver
from photo_retoucher.processing.parameters import PARAM_RANGES, AdjustmentParameters
from photo_retoucher.processing.presets import AdjustmentPresetManager, list_builtin_presets
from photo_retoucher.services.retouch_service import RetouchService
from photo_retoucher.ui.histogram_view import save_histogram
from photo_retoucher.utils.errors import AppError, format_user_error
from photo_retoucher.utils.logger import get_logger, set_log_level

logger = get_logger(__name__)


def build_parser():
    parser = argparse.ArgumentParser(
        prog="photo-retoucher",
        description="Retouch a photo (tone, skin smoothing, sharpening) and export it as JPEG.",
    )
    parser.add_argument('input', help='Input image')
    parser.add_argument('--output', '-o', help='Output JPEG (default: retouch_<timestamp>.jpg)')
    parser.add_argument('--preset', help=f"Start from a preset ({', '.join(list_builtin_presets())} or a saved preset id)")
    parser.add_argument('--presets-file', help='User presets JSON file')
    for name, (low, high, _) in PARAM_RANGES.items():
        parser.add_argument(f'--{name}', type=int, default=None, help=f'{name.capitalize()} ({low} to {high})')
    parser.add_argument('--preview', action='store_true',
                        help=f'Write the {settings.PREVIEW_MAX_EDGE}px preview instead of the '
                             f'{settings.EXPORT_MAX_EDGE}px export')
    parser.add_argument('--histogram', metavar='PATH', help='Also save the RGB histogram as PNG')
    parser.add_argument('--quality', type=int, default=settings.EXPORT_DEFAULTS['jpeg_quality'],
                        help='JPEG quality (1-100)')
    parser.add_argument('--log-level', choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'], help='Logging level')
    return parser


def resolve_parameters(args):
    """Preset values first, then any slider given explicitly on the command line."""
    params = AdjustmentParameters()
    if args.preset:
        params = AdjustmentPresetManager(args.presets_file).resolve(args.preset)
    overrides = {name: getattr(args, name) for name in PARAM_RANGES if getattr(args, name) is not None}
    return params.replace(**overrides).validate()


def main(argv=None):
    """Main function to run the command-line tool."""
    args = build_parser().parse_args(argv)
    if args.log_level:
        set_log_level(args.log_level)

    try:
        params = resolve_parameters(args)
        with RetouchService() as service:
            info = service.load(args.input)
            print(f"Original: {info.width} x {info.height}, export size: {info.export_width} x {info.export_height}, "
                  f"{info.file_size_label}, {info.format}")

            if args.preview:
                result = service.preview(params)
                output = args.output or f"{settings.EXPORT_DEFAULTS['filename_prefix']}preview.jpg"
                size = image_saver.save_jpeg(result.image, output, args.quality)
                histogram = result.histogram
                height, width = result.image.shape[:2]
            else:
                exported = service.export(params, args.output, args.quality)
                output, size, width, height = exported.path, exported.size_bytes, exported.width, exported.height
                histogram = service.preview(params).histogram if args.histogram else None

            if args.histogram:
                save_histogram(histogram, args.histogram)
    except AppError as e:
        logger.debug("Run failed", exc_info=True)
        print(f"Error: {format_user_error(e)}", file=sys.stderr)
        return 1

    print(f"Saved {output}: {width}x{height}px ({round(size / 1024)} KB)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
