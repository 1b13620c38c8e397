"""Level resolution: grouping of elements into levels and their transforms.

Levels are resolved in explicit, ordered passes over the interpreted
records of one document:

1. ``group_elements`` walks the records in file order. A
   ``sfig_org_feature`` closes the elements collected since the previous
   boundary into a named group. Elements after the last boundary form the
   implicit paper level.
2. ``collect_transforms`` maps level names to the transform declared by
   ``sfig_locate_feature``. Declarations may appear anywhere in the file,
   the last declaration of a name wins.
3. ``finalize_groups`` creates a ``Level`` per group and places (transforms)
   the elements of the group on it. Paper level groups share one level.

``renumber_levels`` finally numbers the paper level 0 and all other levels
1, 2, ... in finalization order.
"""

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field, replace

from ..models import (
    IDENTITY_TRANSFORM,
    PAPER_LEVEL_NAME,
    UNNAMED_LEVEL_NAME,
    Element,
    GroupMarkerData,
    Level,
    LocateData,
    NativeElement,
    Record,
    TransformParams,
)
from .interpreter import SFIG_LOCATE_FEATURE, SFIG_ORG_FEATURE
from .statistics import StatisticsAggregator
from .transform import format_transform, place_element, valid_or_identity

log = logging.getLogger(__name__)

InterpretedRecord = tuple[Record, NativeElement | None]


@dataclass
class LevelGroup:
    """Elements collected between two group boundaries."""

    name: str
    elements: list[NativeElement] = field(default_factory=list)
    is_implicit: bool = False


def level_id_for(level_number: int) -> str:
    return f"level_{level_number}"


def group_elements(interpreted: Iterable[InterpretedRecord]) -> list[LevelGroup]:
    """Pass 1: group the elements by their trailing boundary markers.

    Parameters
    ----------
    interpreted : Iterable[InterpretedRecord]
        Records in file order with their interpreted element (None if rejected)

    Returns
    -------
    list[LevelGroup]
        Named groups in closing order, followed by the implicit paper
        level group if elements are left after the last boundary
    """
    groups: list[LevelGroup] = []
    pending: list[NativeElement] = []

    for record, element in interpreted:
        if record.type_name == SFIG_ORG_FEATURE:
            if not pending:
                continue
            name = UNNAMED_LEVEL_NAME
            if element is not None and isinstance(element.data, GroupMarkerData):
                name = element.data.name
            groups.append(LevelGroup(name=name, elements=pending))
            log.debug(f"Closed level group '{name}' with {len(pending)} elements")
            pending = []
        elif record.type_name == SFIG_LOCATE_FEATURE:
            continue
        elif element is not None:
            pending.append(element)

    if pending:
        groups.append(LevelGroup(name=PAPER_LEVEL_NAME, elements=pending, is_implicit=True))
        log.debug(f"Paper level group with {len(pending)} elements")
    return groups


def collect_transforms(interpreted: Iterable[InterpretedRecord]) -> dict[str, TransformParams]:
    """Pass 2: map normalized level names to their declared transform.

    Rejected declarations are not part of the mapping. For repeated names
    the last declaration wins.
    """
    transforms: dict[str, TransformParams] = {}
    for record, element in interpreted:
        if record.type_name != SFIG_LOCATE_FEATURE or element is None:
            continue
        if not isinstance(element.data, LocateData):
            continue
        if element.data.name in transforms:
            log.debug(f"Transform of level '{element.data.name}' redeclared by #{record.id}")
        transforms[element.data.name] = element.data.transform
    return transforms


def _transform_for(group: LevelGroup, transforms: dict[str, TransformParams]) -> TransformParams:
    if group.is_implicit:
        return IDENTITY_TRANSFORM
    params = transforms.get(group.name)
    if params is None:
        log.info(f"No transform declared for level '{group.name}', using identity")
        return IDENTITY_TRANSFORM
    return valid_or_identity(params, group.name)


def finalize_groups(
    groups: Sequence[LevelGroup],
    transforms: dict[str, TransformParams],
    aggregator: StatisticsAggregator,
) -> tuple[list[Level], list[Element]]:
    """Pass 3: create the levels and place the elements of every group.

    Each group gets a provisional id ``level_<n>`` in finalization order.
    Its elements are assigned to the level, transformed and included in
    the coordinate range. All paper level groups (``$$ATRU$$`` boundaries
    and the implicit trailing group) share one paper level; each group is
    still placed with its own transform.
    """
    levels: list[Level] = []
    registered: set[str] = set()
    elements: list[Element] = []
    paper_level: Level | None = None

    for group in groups:
        params = _transform_for(group, transforms)
        level_number = len(levels)
        level = Level.from_transform(level_id_for(level_number), group.name, level_number, params)
        if paper_level is not None and level.is_paper_level:
            log.info(f"Merging {len(group.elements)} elements into paper level {paper_level.id}")
            target_id = paper_level.id
        else:
            if level.id in registered:
                log.warning(f"Level id {level.id} already registered, skipping '{level.name}'")
                continue
            registered.add(level.id)
            levels.append(level)
            if level.is_paper_level:
                paper_level = level
            target_id = level.id
            log.info(f"Level '{level.name}': {len(group.elements)} elements, {format_transform(params)}")
        for native in group.elements:
            element = replace(place_element(native, level), level_id=target_id)
            aggregator.include(element)
            elements.append(element)
    return levels, elements


def renumber_levels(levels: Sequence[Level]) -> tuple[list[Level], dict[str, str]]:
    """Number the paper level 0 and the other levels 1, 2, ... in order.

    Parameters
    ----------
    levels : Sequence[Level]
        Levels in finalization order

    Returns
    -------
    tuple[list[Level], dict[str, str]]
        Levels sorted by their new number and the mapping of old to new ids
    """
    paper_index = next((idx for idx, level in enumerate(levels) if level.is_paper_level), None)
    renumbered: list[Level] = []
    id_mapping: dict[str, str] = {}
    working_number = 1
    for idx, level in enumerate(levels):
        if idx == paper_index:
            number = 0
        else:
            number = working_number
            working_number += 1
        new_level = replace(level, id=level_id_for(number), level_number=number)
        id_mapping[level.id] = new_level.id
        renumbered.append(new_level)
    renumbered.sort(key=lambda level: level.level_number)
    return renumbered, id_mapping


def relink_elements(elements: Iterable[Element], id_mapping: dict[str, str]) -> list[Element]:
    """Rewrite the level ids of the elements after renumbering."""
    return [replace(element, level_id=id_mapping.get(element.level_id, element.level_id)) for element in elements]


def resolve_levels(
    interpreted: Sequence[InterpretedRecord],
    aggregator: StatisticsAggregator,
) -> tuple[list[Level], list[Element]]:
    """Run all level passes and the renumbering over the interpreted records."""
    groups = group_elements(interpreted)
    transforms = collect_transforms(interpreted)
    levels, elements = finalize_groups(groups, transforms, aggregator)
    levels, id_mapping = renumber_levels(levels)
    return levels, relink_elements(elements, id_mapping)
