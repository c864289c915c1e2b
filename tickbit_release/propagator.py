"""Copy a freshly deployed contract address into the files that reference it."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from functools import partial
from pathlib import Path
from typing import Callable, List, Optional

from .addresses import normalize_bookkeeping, patch_file, replace_call_argument, replace_quoted_value
from .config import ReleasePaths

LOG = logging.getLogger(__name__)


@dataclass
class SourceReference:
    """A call expression in a Solidity file whose argument is the address"""
    path: Callable[[ReleasePaths], Path]
    marker: str
    terminator: str = ");"


@dataclass
class PropagationTarget:
    label: str
    record: Callable[[ReleasePaths], Path]
    config_line: int
    sources: List[SourceReference] = field(default_factory=list)


PRIMARY = PropagationTarget(
    label="Tickbit",
    record=lambda p: p.tickbit_record,
    config_line=0,
    sources=[
        SourceReference(
            path=lambda p: p.tickbit_ticket_source,
            marker="tickbitContract = Tickbit(",
        ),
    ],
)

SECONDARY = PropagationTarget(
    label="TickbitTicket",
    record=lambda p: p.tickbit_ticket_record,
    config_line=1,
)


def propagate(target: PropagationTarget, paths: Optional[ReleasePaths] = None) -> str:
    """
    Normalize the target's bookkeeping file, then write its address into the
    Solidity sources and front-end configs, in that order.

    Files are rewritten one at a time. If a later file fails, earlier ones
    stay rewritten; the failing file itself is left untouched.
    """
    paths = paths or ReleasePaths()
    address = normalize_bookkeeping(target.record(paths))

    for ref in target.sources:
        patch_file(
            ref.path(paths),
            partial(replace_call_argument, marker=ref.marker, terminator=ref.terminator, new_address=address),
        )

    for config in paths.frontend_configs:
        patch_file(config, partial(replace_quoted_value, line_index=target.config_line, new_address=address))

    print(f"Deployed {target.label}.sol contract address updated successfully")
    return address
