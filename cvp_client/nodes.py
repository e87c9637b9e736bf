"""Ordered pool of interchangeable controller nodes."""

from __future__ import annotations

from typing import Iterable

from .errors import ConfigurationError


class NodePool:
    """
    Fixed, ordered list of candidate hosts.

    Insertion order is the login and failover order.  The pool keeps no
    cursor: :meth:`next_candidates` is a pure function of the node list and
    the currently bound host.
    """

    def __init__(self, nodes: "Iterable[str] | str") -> None:
        if isinstance(nodes, str):
            nodes = [nodes]
        ordered: list[str] = []
        for node in nodes:
            if node not in ordered:
                ordered.append(node)
        if not ordered:
            raise ConfigurationError("At least one CVP node is required")
        self._nodes = tuple(ordered)

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self):
        return iter(self._nodes)

    def __repr__(self) -> str:
        return f"NodePool({list(self._nodes)!r})"

    @property
    def nodes(self) -> tuple[str, ...]:
        return self._nodes

    def next_candidates(self, current: str | None = None,
                        exclude_current: bool = False) -> tuple[str, ...]:
        """
        Return the hosts to try for the next login, each at most once.

        Without a *current* host this is the pool order.  With one, the other
        nodes follow in pool order and *current* itself is either tried first
        (re-login after a logout) or, with *exclude_current*, left out
        (failover after a transport error).  A single-node pool always
        returns that node.
        """
        if current is None or current not in self._nodes:
            return self._nodes
        others = tuple(n for n in self._nodes if n != current)
        if exclude_current and others:
            return others
        return (current,) + others
