# -*- mode: python -*-
"""Inbreeding coefficients from recorded ancestry using Wright's path method

The pedigree of an animal (or of the hypothetical offspring of a pairing) is
expanded into a binary tree of sire and dam subtrees. Ancestors that occur in
more than one lineage are expanded again at every occurrence, so the tree
contains every route from a parent back to each of its ancestors. The
coefficient is

    F = Σ 0.5^(n1 + n2 + 1) × (1 + F_A)

summed over every common ancestor A and every pair of paths to it, where n1
and n2 count the parent-to-ancestor links on the sire and dam sides.

Records are supplied by an injected `fetch_animal(identifier)` callable that
returns an `AnimalRecord` or None. Nothing here touches a database or keeps
state between calls.

"""
import logging
from collections.abc import Callable, Hashable, Iterator, Sequence
from dataclasses import dataclass, field
from typing import Optional

log = logging.getLogger(__name__)

DEFAULT_GENERATIONS = 50
DEFAULT_PAIRING_GENERATIONS = 5
ANIMAL_PRECISION = 2
PAIRING_PRECISION = 4
OFFSPRING_ID = "theoretical"
OFFSPRING_NAME = "Theoretical Offspring"

Path = tuple[Hashable, ...]


@dataclass(frozen=True)
class AnimalRecord:
    """The parts of a stored animal needed to trace its ancestry"""

    identifier: Hashable
    name: str
    sire: Hashable | None = None
    dam: Hashable | None = None


FetchAnimal = Callable[[Hashable], Optional[AnimalRecord]]


@dataclass
class PedigreeNode:
    identifier: Hashable
    name: str
    sire: Optional["PedigreeNode"] = None
    dam: Optional["PedigreeNode"] = None
    inbreeding: float = 0.0

    def is_leaf(self) -> bool:
        return self.sire is None and self.dam is None

    def parents(self) -> Iterator["PedigreeNode"]:
        """The recorded parents of this node, sire first"""
        if self.sire is not None:
            yield self.sire
        if self.dam is not None:
            yield self.dam


@dataclass(frozen=True)
class Ancestor:
    identifier: Hashable
    name: str
    inbreeding: float = 0.0


@dataclass(frozen=True)
class PathPair:
    """One sire-side and one dam-side path to a common ancestor.

    Paths include both the parent they start from and the ancestor they end
    at, so each is one element longer than its number of links.
    """

    sire_path: Path
    dam_path: Path
    contribution: float

    @property
    def sire_links(self) -> int:
        return len(self.sire_path) - 1

    @property
    def dam_links(self) -> int:
        return len(self.dam_path) - 1


@dataclass
class AncestorContribution:
    ancestor: Ancestor
    path_pairs: list[PathPair] = field(default_factory=list)

    @property
    def contribution(self) -> float:
        total = 0.0
        for pair in self.path_pairs:
            total += pair.contribution
        return total


@dataclass(frozen=True)
class PathPairBreakdown:
    sire_path: Path
    dam_path: Path
    sire_links: int
    dam_links: int
    contribution_pct: float


@dataclass(frozen=True)
class AncestorBreakdown:
    ancestor_id: Hashable
    ancestor_name: str
    inbreeding_pct: float
    contribution_pct: float
    path_pairs: list[PathPairBreakdown]


@dataclass(frozen=True)
class InbreedingExplanation:
    total: float
    breakdown: list[AncestorBreakdown] = field(default_factory=list)


def to_percent(fraction: float, places: int) -> float:
    return round(fraction * 100, places)


def build_pedigree(
    identifier: Hashable | None,
    fetch_animal: FetchAnimal,
    depth: int,
    lineage: frozenset = frozenset(),
) -> PedigreeNode | None:
    """Expand `identifier` into an ancestry tree at most `depth` generations deep.

    `lineage` holds the identifiers on the path from the root to this call.
    An animal that turns up in its own lineage can only come from corrupted
    parentage records; it is returned as a leaf so the recursion terminates.
    The same animal may still appear any number of times in other branches.
    """
    if identifier is None or depth <= 0:
        return None
    record = fetch_animal(identifier)
    if record is None:
        return None
    if identifier in lineage:
        log.debug("%s occurs in its own lineage; truncating branch", identifier)
        return PedigreeNode(identifier, record.name)
    lineage = lineage | {identifier}
    return PedigreeNode(
        identifier,
        record.name,
        sire=build_pedigree(record.sire, fetch_animal, depth - 1, lineage),
        dam=build_pedigree(record.dam, fetch_animal, depth - 1, lineage),
    )


def collect_ancestors(node: PedigreeNode | None) -> list[Ancestor]:
    """All the animals in a subtree in pre-order, including repeats"""
    if node is None:
        return []
    out = [Ancestor(node.identifier, node.name, node.inbreeding)]
    for parent in node.parents():
        out.extend(collect_ancestors(parent))
    return out


def dedupe_by_identity(entries: Sequence[Ancestor]) -> list[Ancestor]:
    """Keep the first entry for each identifier, preserving order"""
    seen = set()
    out = []
    for entry in entries:
        if entry.identifier not in seen:
            seen.add(entry.identifier)
            out.append(entry)
    return out


def find_common_ancestors(
    sire: PedigreeNode | None, dam: PedigreeNode | None
) -> list[Ancestor]:
    """The distinct animals that occur in both the sire and the dam lineage.

    Each common ancestor is listed once no matter how many times it occurs,
    because `find_paths_to_ancestor` already finds every route to it.
    """
    if sire is None or dam is None:
        return []
    dam_ids = {entry.identifier for entry in collect_ancestors(dam)}
    return [
        entry
        for entry in dedupe_by_identity(collect_ancestors(sire))
        if entry.identifier in dam_ids
    ]


def find_paths_to_ancestor(
    node: PedigreeNode | None, identifier: Hashable, path: Path = ()
) -> list[Path]:
    """Every path from `node` to the ancestor `identifier`, inclusive of both"""
    if node is None:
        return []
    path = (*path, node.identifier)
    if node.identifier == identifier:
        return [path]
    paths = []
    for parent in node.parents():
        paths.extend(find_paths_to_ancestor(parent, identifier, path))
    return paths


def ancestor_contributions(
    sire: PedigreeNode | None, dam: PedigreeNode | None
) -> list[AncestorContribution]:
    """Wright's terms for each common ancestor and each pair of paths to it"""
    out = []
    for ancestor in find_common_ancestors(sire, dam):
        item = AncestorContribution(ancestor)
        sire_paths = find_paths_to_ancestor(sire, ancestor.identifier)
        dam_paths = find_paths_to_ancestor(dam, ancestor.identifier)
        for sire_path in sire_paths:
            for dam_path in dam_paths:
                # both lengths count the ancestor and the starting parent
                exponent = len(sire_path) + len(dam_path) - 1
                term = 0.5**exponent * (1 + ancestor.inbreeding)
                item.path_pairs.append(PathPair(sire_path, dam_path, term))
        out.append(item)
    log.debug("found %d common ancestors", len(out))
    return out


def _total(contributions: Sequence[AncestorContribution]) -> float:
    total = 0.0
    for item in contributions:
        total += item.contribution
    return total


def coefficient_of_inbreeding(
    sire: PedigreeNode | None, dam: PedigreeNode | None
) -> float:
    """Coefficient (as a fraction) for an offspring of `sire` and `dam`"""
    return _total(ancestor_contributions(sire, dam))


def explain(
    sire: PedigreeNode | None,
    dam: PedigreeNode | None,
    places: int = PAIRING_PRECISION,
) -> InbreedingExplanation:
    """Coefficient for an offspring of `sire` and `dam` with the contribution
    of each common ancestor and each pair of paths, largest contributors first.

    All values are percentages rounded to `places`.
    """
    contributions = ancestor_contributions(sire, dam)
    breakdown = [
        AncestorBreakdown(
            ancestor_id=item.ancestor.identifier,
            ancestor_name=item.ancestor.name,
            inbreeding_pct=to_percent(item.ancestor.inbreeding, places),
            contribution_pct=to_percent(item.contribution, places),
            path_pairs=[
                PathPairBreakdown(
                    sire_path=pair.sire_path,
                    dam_path=pair.dam_path,
                    sire_links=pair.sire_links,
                    dam_links=pair.dam_links,
                    contribution_pct=to_percent(pair.contribution, places),
                )
                for pair in item.path_pairs
            ],
        )
        for item in contributions
    ]
    breakdown.sort(key=lambda item: item.contribution_pct, reverse=True)
    return InbreedingExplanation(
        total=to_percent(_total(contributions), places), breakdown=breakdown
    )


def pairing_pedigree(
    sire_id: Hashable,
    dam_id: Hashable,
    fetch_animal: FetchAnimal,
    generations: int,
) -> PedigreeNode:
    """Pedigree of a hypothetical offspring of `sire_id` and `dam_id`"""
    return PedigreeNode(
        OFFSPRING_ID,
        OFFSPRING_NAME,
        sire=build_pedigree(sire_id, fetch_animal, generations),
        dam=build_pedigree(dam_id, fetch_animal, generations),
    )


def calculate_inbreeding_coefficient(
    identifier: Hashable | None,
    fetch_animal: FetchAnimal,
    generations: int = DEFAULT_GENERATIONS,
) -> float:
    """Inbreeding coefficient of a recorded animal, as a percentage"""
    if identifier is None:
        return 0.0
    pedigree = build_pedigree(identifier, fetch_animal, generations)
    if pedigree is None:
        return 0.0
    return to_percent(
        coefficient_of_inbreeding(pedigree.sire, pedigree.dam), ANIMAL_PRECISION
    )


def calculate_pairing_inbreeding(
    sire_id: Hashable | None,
    dam_id: Hashable | None,
    fetch_animal: FetchAnimal,
    generations: int = DEFAULT_PAIRING_GENERATIONS,
) -> float:
    """Predicted inbreeding coefficient of offspring from a pairing, as a percentage"""
    if sire_id is None or dam_id is None:
        return 0.0
    offspring = pairing_pedigree(sire_id, dam_id, fetch_animal, generations)
    return to_percent(
        coefficient_of_inbreeding(offspring.sire, offspring.dam), PAIRING_PRECISION
    )


def explain_pairing_inbreeding(
    sire_id: Hashable | None,
    dam_id: Hashable | None,
    fetch_animal: FetchAnimal,
    generations: int = DEFAULT_GENERATIONS,
) -> InbreedingExplanation:
    """Like `calculate_pairing_inbreeding`, with a per-ancestor breakdown"""
    if sire_id is None or dam_id is None:
        return InbreedingExplanation(total=0.0)
    offspring = pairing_pedigree(sire_id, dam_id, fetch_animal, generations)
    return explain(offspring.sire, offspring.dam, PAIRING_PRECISION)
