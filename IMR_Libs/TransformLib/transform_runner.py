"""
End-to-end transform runner.

Decodes the base image, dispatches the command, materializes the resulting
view and encodes it to a file or a stream. Failures caused by input files or
command syntax are returned as a TransformResult instead of being raised.

Classes:
    TransformRequest: Configuration of a single transform run
    TransformResult: Outcome of a run

Functions:
    run_transform: Execute a TransformRequest
"""

from dataclasses import dataclass, asdict, field
from pathlib import Path
from typing import Any, BinaryIO, Dict, List, Optional
import logging
import sys

from IMR_Libs.CodecLib.image_codecs import (
    encode_image,
    load_image_source,
    output_format_for_path,
    save_image_source,
)
from IMR_Libs.constants import COMMAND_MERGE, COMMAND_SCALE, DEFAULT_JPEG_QUALITY, DEFAULT_OUTPUT_FORMAT
from IMR_Libs.errors import ImageToolError
from IMR_Libs.log_utils import get_logger
from IMR_Libs.TransformLib.transform_dispatcher import TransformDispatcher


@dataclass
class TransformRequest:
    """Configuration for one transform run.

    Attributes:
        input_path: Base image path ('~' is expanded)
        command: Command token, e.g. 'scale:2' or 'merge:logo.png:4:4'
        output_path: Destination file; None writes BMP to the output stream
        quality: JPEG quality 1-100 (default: 95, only for JPEG)
        create_directories: Create missing output directories (default: True)
        enable_logging: Emit progress logs (forced off when streaming)
    """
    input_path: str
    command: str
    output_path: Optional[str] = None
    quality: int = DEFAULT_JPEG_QUALITY
    create_directories: bool = True
    enable_logging: bool = True

    def writes_to_stream(self) -> bool:
        return not self.output_path

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TransformRequest":
        """Create from dictionary, ignoring unknown keys."""
        filtered = {k: v for k, v in data.items() if k in cls.__dataclass_fields__}
        return cls(**filtered)


@dataclass
class TransformResult:
    """Outcome of run_transform.

    Attributes:
        success: True when the output was written
        output_path: File written, or None when streamed
        output_format: Format tag used for encoding
        size: (width, height) of the output image
        error_kind: ImageToolError.kind of the failure, if any
        errors: Human-readable error messages
    """
    success: bool
    output_path: Optional[Path] = None
    output_format: Optional[str] = None
    size: Optional[tuple] = None
    error_kind: Optional[str] = None
    errors: List[str] = field(default_factory=list)


def run_transform(
    request: TransformRequest,
    output_stream: Optional[BinaryIO] = None,
    dispatcher: Optional[TransformDispatcher] = None,
    log: Optional[logging.Logger] = None,
) -> TransformResult:
    """
    Execute a transform request.

    Args:
        request: What to read, how to transform it and where to write it
        output_stream: Binary stream used when request.output_path is empty
                       (default: sys.stdout.buffer)
        dispatcher: Transform dispatcher (default: one using the global registry)
        log: Logger (default: this module's logger, or a silent one when
             logging is disabled or the output is streamed)

    Returns:
        TransformResult describing success or the failure
    """
    if log is None:
        enabled = request.enable_logging and not request.writes_to_stream()
        log = get_logger(__name__, enabled=enabled)

    dispatcher = dispatcher or TransformDispatcher(log=log)

    try:
        command = dispatcher.parse(request.command)
        base = load_image_source(request.input_path, log=log)
        log.info("This image has color model: %r", base.color_model())

        result_source = dispatcher.apply(base, command)
        size = result_source.bounds().size

        if request.writes_to_stream():
            stream = output_stream if output_stream is not None else sys.stdout.buffer
            encode_image(result_source, stream, DEFAULT_OUTPUT_FORMAT,
                         quality=request.quality, log=log)
            stream.flush()
            output_path = None
            output_format = DEFAULT_OUTPUT_FORMAT
        else:
            output_path = save_image_source(
                result_source,
                request.output_path,
                quality=request.quality,
                create_directories=request.create_directories,
                log=log,
            )
            output_format = output_format_for_path(request.output_path)
    except ImageToolError as e:
        log.error("%s: %s", e.kind, e)
        return TransformResult(success=False, error_kind=e.kind, errors=[str(e)])

    if command.kind == COMMAND_MERGE:
        log.info("Successfully merged two images!")
    elif command.kind == COMMAND_SCALE:
        log.info("Successfully scaled image!")

    return TransformResult(
        success=True,
        output_path=output_path,
        output_format=output_format,
        size=size,
    )
