"""MdcUrlGenerator: remote image transformation URLs for processing tasks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional

from cantofal.auth.config import DEFAULT_MASTER_IMAGE_SIZE
from cantofal.util.identifiers import decode

# image as a square: -B<size>
BOXED: str = "-B"
# image scaled down to width and height: -S<width>x<height>
SCALED: str = "-S"
# image converted to a format: -F<EXT> (JPG, WEBP, PNG, TIF, GIF, JP2)
FORMATTED: str = "-F"
# image cropped to an area: -C<width>x<height>,<x>,<y>
CROPPED: str = "-C"


@dataclass(slots=True, frozen=True)
class CropArea:
    """A crop rectangle; offsets are measured from the top left corner."""

    width: float
    height: float
    offset_left: float = 0
    offset_top: float = 0

    def scaled(self, factor: float) -> CropArea:
        return CropArea(
            width=int(self.width * factor),
            height=int(self.height * factor),
            offset_left=int(self.offset_left * factor),
            offset_top=int(self.offset_top * factor),
        )


@dataclass(slots=True)
class ProcessingTask:
    """
    What the host wants rendered from a source asset.

    `image_width`/`image_height` are dimensions the host already derived for
    the output; `source_width`/`source_height` are the host's own record of
    the asset size, used when the DAM does not report one.
    """

    source_identifier: str
    width: Optional[int] = None
    height: Optional[int] = None
    max_width: Optional[int] = None
    max_height: Optional[int] = None
    crop: Optional[CropArea] = None
    file_extension: Optional[str] = None
    image_width: Optional[int] = None
    image_height: Optional[int] = None
    source_width: Optional[int] = None
    source_height: Optional[int] = None


@dataclass(slots=True)
class MdcConfiguration:
    """Resolved transformation; `resized_crop` is the crop in native pixels."""

    width: Optional[int] = None
    height: Optional[int] = None
    size: Optional[int] = None
    format: Optional[str] = None
    crop: Optional[CropArea] = None
    resized_crop: Optional[CropArea] = None


@dataclass(slots=True, frozen=True)
class SuffixParts:
    scale: str = ""
    format: str = ""
    crop: str = ""

    def join(self) -> str:
        return f"{self.scale}{self.format}{self.crop}"


SuffixFilter = Callable[[SuffixParts, MdcConfiguration], str]


def identity_suffix_filter(parts: SuffixParts, configuration: MdcConfiguration) -> str:
    return parts.join()


@dataclass(slots=True, frozen=True)
class _MasterDimensions:
    width: float
    height: float
    scale: float


def build_suffix_parts(configuration: MdcConfiguration) -> SuffixParts:
    scale = ""
    if configuration.size is not None:
        scale = f"{BOXED}{int(configuration.size)}"
    elif configuration.width is not None and configuration.height is not None:
        width, height = int(configuration.width), int(configuration.height)
        scale = f"{BOXED}{width}" if width == height else f"{SCALED}{width}x{height}"

    fmt = f"{FORMATTED}{configuration.format}" if configuration.format else ""

    crop = ""
    if configuration.crop is not None:
        area = configuration.resized_crop or configuration.crop
        crop = (
            f"{CROPPED}{int(area.width)}x{int(area.height)},"
            f"{int(area.offset_left)},{int(area.offset_top)}"
        )
    return SuffixParts(scale=scale, format=fmt, crop=crop)


def compose_suffix(
    configuration: MdcConfiguration,
    suffix_filter: Optional[SuffixFilter] = None,
) -> str:
    """
    Build the transformation suffix: scale, format, crop (in that order).

    The result always goes through `suffix_filter`, which may replace it.
    """
    parts = build_suffix_parts(configuration)
    use_filter = suffix_filter if suffix_filter is not None else identity_suffix_filter
    return use_filter(parts, configuration)


class MdcUrlGenerator:
    """Derive MDC URLs from processing tasks, using native sizes from the DAM."""

    def __init__(
        self,
        repository: Any,
        *,
        master_image_size: int = DEFAULT_MASTER_IMAGE_SIZE,
        suffix_filter: Optional[SuffixFilter] = None,
    ) -> None:
        self._repository = repository
        self._master_image_size = master_image_size
        self._suffix_filter = suffix_filter or identity_suffix_filter

    def generate(self, task: ProcessingTask) -> str:
        configuration = self.transform_configuration(task)
        base_url = self._repository.generate_mdc_base_url(task.source_identifier)
        return base_url + self.compose_suffix(configuration)

    def compose_suffix(
        self,
        configuration: MdcConfiguration,
        suffix_filter: Optional[SuffixFilter] = None,
    ) -> str:
        return compose_suffix(configuration, suffix_filter or self._suffix_filter)

    def resolve_display_dimensions(self, task: ProcessingTask) -> tuple[int, int]:
        configuration = self.transform_configuration(task)
        width = configuration.width or 0
        height = configuration.height or 0
        if task.max_width is not None:
            width = min(width, int(task.max_width))
        if task.max_height is not None:
            height = min(height, int(task.max_height))
        return int(width), int(height)

    def transform_configuration(self, task: ProcessingTask) -> MdcConfiguration:
        """
        Resolve the output size of `task`.

        Without an explicit width and height, the first available source wins:
        declared image dimensions, configured width/height, max width/height,
        master dimensions, 0.
        """
        configuration = MdcConfiguration(crop=task.crop)
        if task.file_extension:
            configuration.format = task.file_extension.upper()

        master: Optional[_MasterDimensions] = None
        if task.width and task.height:
            width: float = int(task.width)
            height: float = int(task.height)
        else:
            master = self._master_dimensions(task)
            width = _first_defined(task.image_width or task.width, task.max_width, master.width)
            height = _first_defined(task.image_height or task.height, task.max_height, master.height)
            if task.crop is not None:
                width = min(width, task.crop.width)
                height = min(height, task.crop.height)

        if task.crop is not None:
            if master is None:
                master = self._master_dimensions(task)
            configuration.resized_crop = task.crop.scaled(master.scale)

        configuration.width = int(width)
        configuration.height = int(height)
        if configuration.width == configuration.height:
            configuration.size = configuration.width
        return configuration

    def _master_dimensions(self, task: ProcessingTask) -> _MasterDimensions:
        scheme, remote_id = decode(task.source_identifier)
        record = self._repository.get_file_details(scheme, remote_id)
        width = record.width or task.source_width or 0
        height = record.height or task.source_height or 0
        if width <= 0 or height <= 0:
            return _MasterDimensions(width=0, height=0, scale=1)

        master = self._master_image_size
        scale = min(1, master / width, master / height)
        return _MasterDimensions(width=scale * width, height=scale * height, scale=scale)


def _first_defined(*values: Optional[float]) -> float:
    for value in values:
        if value is not None:
            return value
    return 0
