"""Prop shapes for diagram components.

Every diagram component renders from its own structured data. A component may
accept more than one shape (``MemoryVisualizer`` draws a flat cell list, a set
of named regions, or a variable table), but each shape is a distinct record
type and a payload must match one of them completely: unknown keys are
rejected, so props written for one component do not silently pass for another.

Shapes are part of the contract with the rendering components. Adding an
optional field is safe; removing or retyping a field breaks every chapter that
uses the component.
"""

from typing import Literal

from pydantic import Field, ValidationInfo, field_validator, model_validator

from coursebook_core.schemas.base import AuthoredModel

# ====== PointerDiagram ======


class PointerBox(AuthoredModel):
    """A memory box in a pointer diagram."""

    label: str = Field(..., description="Name shown on the box")
    address: str = Field(..., description="Address of the box")
    value: str = Field(..., description="Stored value")
    type: str = Field(..., description="Box kind, e.g. pointer or data")


class PointerArrow(AuthoredModel):
    """An arrow between two boxes, referenced by label."""

    from_: str = Field(..., alias="from", description="Source box label")
    to: str = Field(..., description="Target box label")


class PointerBoxesProps(AuthoredModel):
    """Boxes connected by arrows."""

    title: str | None = None
    boxes: list[PointerBox] = Field(..., min_length=1)
    arrows: list[PointerArrow] = Field(...)

    @field_validator("arrows")
    @classmethod
    def arrows_reference_boxes(
        cls, arrows: list[PointerArrow], info: ValidationInfo
    ) -> list[PointerArrow]:
        """Every arrow endpoint must name an existing box."""
        boxes = info.data.get("boxes")
        if boxes is None:
            return arrows
        labels = {box.label for box in boxes}
        for arrow in arrows:
            for end in (arrow.from_, arrow.to):
                if end not in labels:
                    raise ValueError(f"arrow endpoint {end!r} does not name a box")
        return arrows


class PointerVariable(AuthoredModel):
    """A named variable, optionally pointing at another one."""

    name: str
    type: str
    value: str
    address: str
    points_to: str | None = None


class PointerVariablesProps(AuthoredModel):
    """Variables with points-to links."""

    title: str | None = None
    variables: list[PointerVariable] = Field(..., min_length=1)


class PointerRef(AuthoredModel):
    """The pointer side of a pointer/target diagram."""

    name: str
    address: str


class TargetElement(AuthoredModel):
    """One element of the pointed-to array."""

    index: int | str
    value: str
    address: str


class PointerTarget(AuthoredModel):
    """The array a pointer refers to."""

    name: str
    elements: list[TargetElement] = Field(..., min_length=1)


class PointerTargetProps(AuthoredModel):
    """A single pointer aimed at an array."""

    title: str | None = None
    pointer: PointerRef
    target: PointerTarget


# ====== ArrayVisualizer ======


class ArrayItem(AuthoredModel):
    """One array slot. Multi-dimensional indexes are written as strings."""

    index: int | str
    value: str


class ArrayProps(AuthoredModel):
    """Linear array layout."""

    title: str | None = None
    items: list[ArrayItem] = Field(..., min_length=1)
    highlight_index: int | None = Field(None, strict=True)
    element_size: int = Field(..., strict=True, ge=1)
    start_address: str

    @field_validator("highlight_index")
    @classmethod
    def highlight_within_items(cls, index: int | None, info: ValidationInfo) -> int | None:
        """The highlighted slot must exist."""
        items = info.data.get("items")
        if index is not None and items is not None and not 0 <= index < len(items):
            raise ValueError(f"highlightIndex {index} is outside 0..{len(items) - 1}")
        return index


# ====== MemoryVisualizer ======


class MemoryCell(AuthoredModel):
    """A labelled cell in a memory segment layout."""

    address: str
    label: str
    value: str
    type: str


class MemoryCellsProps(AuthoredModel):
    """Flat list of memory cells."""

    title: str | None = None
    cells: list[MemoryCell] = Field(..., min_length=1)


class OffsetCell(AuthoredModel):
    """A cell positioned by element offset from a base address."""

    label: str
    value: str
    offset: int = Field(..., strict=True, ge=0)


class MemoryOffsetProps(AuthoredModel):
    """Cells laid out from a base address in fixed-size steps."""

    title: str | None = None
    base_address: str
    cell_size: int = Field(..., strict=True, ge=1)
    cells: list[OffsetCell] = Field(..., min_length=1)


class RegionCell(AuthoredModel):
    """A named variable inside a memory region."""

    address: str
    name: str
    value: str
    type: str
    points_to: str | None = None


class MemoryRegion(AuthoredModel):
    """A named segment (stack, heap, ...)."""

    name: str
    description: str | None = None
    direction: Literal["up", "down"] | None = None
    cells: list[RegionCell] | None = None


class MemoryRegionsProps(AuthoredModel):
    """Named memory regions."""

    title: str | None = None
    regions: list[MemoryRegion] = Field(..., min_length=1)


class SizedVariable(AuthoredModel):
    """A variable with its size in bytes."""

    name: str
    type: str
    value: str
    size: int = Field(..., strict=True, ge=0)
    address: str


class MemoryVariablesProps(AuthoredModel):
    """Variables placed in memory with sizes."""

    title: str | None = None
    variables: list[SizedVariable] = Field(..., min_length=1)


# ====== StructLayoutDiagram ======


class StructField(AuthoredModel):
    """A struct member or padding entry."""

    name: str
    type: str | None = None
    size: int = Field(..., strict=True, ge=0)
    offset: int | None = Field(None, strict=True, ge=0)
    shared: bool | None = None


def _check_fields_fit(fields: list[StructField], total_size: int | None) -> None:
    if total_size is None:
        return
    for field in fields:
        if field.offset is not None and field.offset + field.size > total_size:
            raise ValueError(
                f"field {field.name!r} ends at byte {field.offset + field.size}, "
                f"beyond totalSize {total_size}"
            )


class StructLayoutProps(AuthoredModel):
    """Member offsets and sizes of one struct."""

    title: str | None = None
    name: str | None = None
    struct_name: str | None = None
    fields: list[StructField] = Field(..., min_length=1)
    total_size: int | None = Field(None, strict=True, ge=0)

    @field_validator("total_size")
    @classmethod
    def fields_fit(cls, total_size: int | None, info: ValidationInfo) -> int | None:
        """Fields with offsets must lie within the struct."""
        fields = info.data.get("fields")
        if fields is not None:
            _check_fields_fit(fields, total_size)
        return total_size


class StructLayout(AuthoredModel):
    """One layout in a side-by-side comparison."""

    name: str
    fields: list[StructField] = Field(..., min_length=1)
    total_size: int | None = Field(None, strict=True, ge=0)

    @field_validator("total_size")
    @classmethod
    def fields_fit(cls, total_size: int | None, info: ValidationInfo) -> int | None:
        """Fields with offsets must lie within the layout."""
        fields = info.data.get("fields")
        if fields is not None:
            _check_fields_fit(fields, total_size)
        return total_size


class StructComparisonProps(AuthoredModel):
    """Several layouts compared, e.g. struct vs union."""

    title: str | None = None
    layouts: list[StructLayout] = Field(..., min_length=1)


# ====== LinkedListDiagram ======


class ListNode(AuthoredModel):
    """A node value with an optional label such as ``head``."""

    value: str
    label: str | None = None


class LinkedListProps(AuthoredModel):
    """A singly linked chain of nodes."""

    title: str | None = None
    nodes: list[ListNode] = Field(..., min_length=1)


# ====== StackFrameVisualizer ======


class FrameVariable(AuthoredModel):
    name: str
    value: str


class StackFrame(AuthoredModel):
    """One call frame, innermost last."""

    name: str
    variables: list[FrameVariable] | None = None
    locals: list[str] | None = None
    status: str | None = None


class StackFramesProps(AuthoredModel):
    """A call stack snapshot."""

    title: str | None = None
    frames: list[StackFrame] = Field(..., min_length=1)


# ====== CompilationPipeline ======


class PipelineStage(AuthoredModel):
    name: str
    description: str


class PipelineProps(AuthoredModel):
    """Ordered build steps."""

    title: str | None = None
    stages: list[PipelineStage] = Field(..., min_length=1)


# ====== BitRepresentation ======


class BitRow(AuthoredModel):
    """An integer drawn as a fixed-width bit string."""

    label: str
    value: int = Field(..., strict=True)
    bits: int = Field(..., strict=True, ge=1)

    @model_validator(mode="after")
    def value_fits(self) -> "BitRow":
        """The value must be representable in the given width."""
        if not 0 <= self.value < 2**self.bits:
            raise ValueError(f"value {self.value} does not fit in {self.bits} bits")
        return self


class BitRowsProps(AuthoredModel):
    """Rows of bit strings, e.g. operands and results of bitwise operations."""

    title: str | None = None
    rows: list[BitRow] = Field(..., min_length=1)


DEFAULT_DIAGRAM_SHAPES: dict[str, tuple[type[AuthoredModel], ...]] = {
    "PointerDiagram": (PointerBoxesProps, PointerVariablesProps, PointerTargetProps),
    "ArrayVisualizer": (ArrayProps,),
    "MemoryVisualizer": (
        MemoryCellsProps,
        MemoryOffsetProps,
        MemoryRegionsProps,
        MemoryVariablesProps,
    ),
    "StructLayoutDiagram": (StructLayoutProps, StructComparisonProps),
    "LinkedListDiagram": (LinkedListProps,),
    "StackFrameVisualizer": (StackFramesProps,),
    "CompilationPipeline": (PipelineProps,),
    "BitRepresentation": (BitRowsProps,),
}
