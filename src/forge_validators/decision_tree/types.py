"""Decision-tree node types and rollback outputs."""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import ClassVar
from enum import StrEnum


class DecisionTreeError(ValueError):
    """Structurally invalid tree or unusable chance probabilities."""


class NodeKind(StrEnum):
    DECISION = "decision"
    CHANCE = "chance"
    TERMINAL = "terminal"


class MissingProbabilityPolicy(StrEnum):
    """What rollback does with chance branches that carry no probability.

    - `UNIFORM`: each unlabelled branch gets `1 / len(siblings)`
    - `RAISE`: fail with `DecisionTreeError`
    """

    UNIFORM = "uniform"
    RAISE = "raise"


def _check_finite(name: str, label: str, value: float | None) -> None:
    if value is not None and not math.isfinite(value):
        raise DecisionTreeError(f"Node {name!r}: {label} must be finite, got {value!r}")


class _TreeValue:
    """Value semantics for tree dataclasses without recursing into children.

    Equality, hashing and repr walk the tree with an explicit stack, so deep
    trees stay usable past the interpreter recursion limit.
    """

    _node_fields: ClassVar[tuple[str, ...]] = ()

    def _signature(self) -> tuple[tuple[object, ...], ...]:
        # Pre-order node fields plus child count; determines the whole tree.
        out: list[tuple[object, ...]] = []
        stack = [self]
        while stack:
            node = stack.pop()
            out.append(
                tuple(getattr(node, f) for f in self._node_fields) + (len(node.children),)
            )
            stack.extend(reversed(node.children))
        return tuple(out)

    def __eq__(self, other: object) -> bool:
        if other.__class__ is not self.__class__:
            return NotImplemented
        return self._signature() == other._signature()

    def __hash__(self) -> int:
        return hash(self._signature())

    def __repr__(self) -> str:
        fields = ", ".join(f"{f}={getattr(self, f)!r}" for f in self._node_fields)
        return f"{type(self).__name__}({fields}, children={len(self.children)})"


@dataclass(frozen=True, eq=False, repr=False)
class TreeNode(_TreeValue):
    """One node of a decision tree, validated at construction.

    A node is terminal iff it has no children, and a terminal node must carry
    a payoff. `cost` is charged when the node is rolled up; `probability` is
    the branch probability used when the parent is a chance node.
    """

    name: str
    kind: NodeKind
    children: tuple[TreeNode, ...] = ()
    cost: float = 0.0
    probability: float | None = None
    payoff: float | None = None

    _node_fields: ClassVar[tuple[str, ...]] = (
        "name", "kind", "cost", "probability", "payoff"
    )

    def __post_init__(self) -> None:
        if not isinstance(self.kind, NodeKind):
            raise DecisionTreeError(f"Node {self.name!r}: kind must be a NodeKind")
        object.__setattr__(self, "children", tuple(self.children))

        if self.kind == NodeKind.TERMINAL:
            if self.children:
                raise DecisionTreeError(
                    f"Terminal node {self.name!r} must not have children"
                )
            if self.payoff is None:
                raise DecisionTreeError(
                    f"Terminal node {self.name!r} requires a payoff"
                )
        elif not self.children:
            raise DecisionTreeError(
                f"{self.kind.value.capitalize()} node {self.name!r} has no children"
            )

        _check_finite(self.name, "cost", self.cost)
        _check_finite(self.name, "payoff", self.payoff)
        _check_finite(self.name, "probability", self.probability)
        if self.probability is not None and not 0.0 <= self.probability <= 1.0:
            raise DecisionTreeError(
                f"Node {self.name!r}: probability must lie in [0, 1], "
                f"got {self.probability}"
            )

        seen: set[str] = set()
        for child in self.children:
            if child.name in seen:
                raise DecisionTreeError(
                    f"Node {self.name!r} has duplicate child name {child.name!r}"
                )
            seen.add(child.name)

    @classmethod
    def decision(
        cls,
        name: str,
        children: Iterable[TreeNode],
        *,
        cost: float = 0.0,
        probability: float | None = None,
    ) -> TreeNode:
        return cls(
            name=name,
            kind=NodeKind.DECISION,
            children=tuple(children),
            cost=cost,
            probability=probability,
        )

    @classmethod
    def chance(
        cls,
        name: str,
        children: Iterable[TreeNode],
        *,
        cost: float = 0.0,
        probability: float | None = None,
    ) -> TreeNode:
        return cls(
            name=name,
            kind=NodeKind.CHANCE,
            children=tuple(children),
            cost=cost,
            probability=probability,
        )

    @classmethod
    def terminal(
        cls,
        name: str,
        payoff: float,
        *,
        probability: float | None = None,
    ) -> TreeNode:
        return cls(
            name=name,
            kind=NodeKind.TERMINAL,
            payoff=payoff,
            probability=probability,
        )

    @property
    def is_terminal(self) -> bool:
        return self.kind == NodeKind.TERMINAL


@dataclass(frozen=True, eq=False, repr=False)
class RolledNode(_TreeValue):
    """Annotated copy of a `TreeNode` after backward induction.

    `decision` is set on decision nodes only. Under a chance parent,
    `probability` is the effective branch probability (after any uniform
    fill-in); elsewhere it echoes the input value.
    """

    name: str
    kind: NodeKind
    emv: float
    children: tuple[RolledNode, ...] = ()
    decision: str | None = None
    probability: float | None = None
    cost: float = 0.0
    payoff: float | None = None

    _node_fields: ClassVar[tuple[str, ...]] = (
        "name", "kind", "emv", "decision", "probability", "cost", "payoff"
    )

    def child(self, name: str) -> RolledNode:
        for c in self.children:
            if c.name == name:
                return c
        raise KeyError(f"Node {self.name!r} has no child named {name!r}")

    @property
    def chosen(self) -> RolledNode | None:
        """Optimal child of a decision node, None elsewhere."""
        if self.decision is None:
            return None
        return self.child(self.decision)

    def to_dict(self) -> dict[str, object]:
        """Nested mapping echoing the node fields with `emv`/`decision`."""
        # Post-order so that deep trees do not hit the recursion limit.
        built: dict[int, dict[str, object]] = {}
        stack: list[tuple[RolledNode, bool]] = [(self, False)]
        while stack:
            node, expanded = stack.pop()
            if not expanded and node.children:
                stack.append((node, True))
                stack.extend((c, False) for c in reversed(node.children))
                continue

            out: dict[str, object] = {
                "name": node.name,
                "type": node.kind.value,
                "emv": node.emv,
            }
            if node.probability is not None:
                out["probability"] = node.probability
            if node.payoff is not None:
                out["payoff"] = node.payoff
            if node.cost:
                out["cost"] = node.cost
            if node.decision is not None:
                out["decision"] = node.decision
            if node.children:
                out["children"] = [built[id(c)] for c in node.children]
            built[id(node)] = out

        return built[id(self)]


@dataclass(frozen=True, slots=True)
class RiskOutcome:
    """One reachable terminal with its cumulative path probability."""

    name: str
    probability: float
    payoff: float

    def to_dict(self) -> dict[str, object]:
        return {"name": self.name, "probability": self.probability, "payoff": self.payoff}


@dataclass(frozen=True)
class DecisionTreeResult:
    root_emv: float
    optimal_decision: str | None
    decision_path: tuple[str, ...]
    tree: RolledNode
    risk_profiles: Mapping[str, tuple[RiskOutcome, ...]] = field(default_factory=dict)

    def to_dict(self) -> dict[str, object]:
        return {
            "root_emv": self.root_emv,
            "optimal_decision": self.optimal_decision,
            "decision_path": list(self.decision_path),
            "tree": self.tree.to_dict(),
            "risk_profiles": {
                name: [o.to_dict() for o in outcomes]
                for name, outcomes in self.risk_profiles.items()
            },
        }
