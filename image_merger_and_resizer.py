"""
Image Merger and Resizer command-line tool.

Usage:
    image_merger_and_resizer [-v|-q] <image_file> <command> [output_file]

Commands:
    scale:<factor>                         Downscale by a positive integer factor
    merge:<merge_file>[:offsetX][:offsetY] Overlay another image

Without an output file the result is written to stdout as BMP and all
logging is switched off.
"""

from typing import List, Optional, Tuple
import sys

from IMR_Libs.log_utils import configure_logging
from IMR_Libs.TransformLib.transform_runner import TransformRequest, run_transform

USAGE = (
    "Usage: image_merger_and_resizer [-v|-q] <image_file> "
    "<scale:<scale_factor>|merge:<merge_file>[:offsetX][:offsetY]> [output_file]"
)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2


def parse_arguments(argv: List[str]) -> Tuple[Optional[TransformRequest], bool]:
    """
    Parse command-line arguments.

    Args:
        argv: Arguments without the program name

    Returns:
        (request, verbose); request is None when the arguments are invalid
    """
    verbose = False
    quiet = False
    positionals = []
    for arg in argv:
        if arg in ("-v", "--verbose"):
            verbose = True
        elif arg in ("-q", "--quiet"):
            quiet = True
        else:
            positionals.append(arg)

    if len(positionals) not in (2, 3):
        return None, verbose

    request = TransformRequest(
        input_path=positionals[0],
        command=positionals[1],
        output_path=positionals[2] if len(positionals) == 3 else None,
        enable_logging=not quiet,
    )
    return request, verbose


def main(argv: Optional[List[str]] = None) -> int:
    """Main function to run the image merger and resizer."""
    if argv is None:
        argv = sys.argv[1:]

    if any(arg in ("-h", "--help") for arg in argv):
        print(USAGE)
        print(__doc__)
        return EXIT_OK

    request, verbose = parse_arguments(argv)
    if request is None:
        print(USAGE, file=sys.stderr)
        return EXIT_USAGE

    if request.enable_logging and not request.writes_to_stream():
        configure_logging(verbose=verbose)

    result = run_transform(request)
    if not result.success:
        if request.writes_to_stream() or not request.enable_logging:
            # Logging is off here; still report why nothing was written
            for message in result.errors:
                print(f"Error: {message}", file=sys.stderr)
        return EXIT_FAILURE

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
