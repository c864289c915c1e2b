"""
Contract artifact lookup.

Hardhat writes one JSON artifact per contract under
artifacts/contracts/<Name>.sol/<Name>.json. When the artifact is missing the
contracts/ tree is compiled with solc (same version and optimizer settings
as the Hardhat config) so a fresh checkout can still deploy.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

from solcx import compile_standard, install_solc

from .config import SOLIDITY
from .errors import ArtifactError

LOG = logging.getLogger(__name__)

CONTRACTS_DIR = "contracts"
ARTIFACTS_DIR = "artifacts/contracts"
REMAPPINGS = ["@openzeppelin/=node_modules/@openzeppelin/"]


@dataclass
class ContractArtifact:
    name: str
    abi: List[Dict[str, Any]]
    bytecode: str


def artifact_path(name: str, root: Path) -> Path:
    return Path(root) / ARTIFACTS_DIR / f"{name}.sol" / f"{name}.json"


def read_hardhat_artifact(path: Path, name: str) -> ContractArtifact:
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ArtifactError(f"Artifact at {path} is not valid JSON") from e
    abi = data.get("abi")
    bytecode = data.get("bytecode")
    if not abi or not bytecode or bytecode == "0x":
        raise ArtifactError(f"Artifact at {path} is missing abi/bytecode")
    return ContractArtifact(name=name, abi=abi, bytecode=bytecode)


def _standard_input(root: Path) -> Dict[str, Any]:
    sources_dir = Path(root) / CONTRACTS_DIR
    sources = {
        p.relative_to(root).as_posix(): {"content": p.read_text(encoding="utf-8")}
        for p in sorted(sources_dir.rglob("*.sol"))
    }
    if not sources:
        raise ArtifactError(f"No Solidity sources found under {sources_dir}")
    return {
        "language": "Solidity",
        "sources": sources,
        "settings": {
            "optimizer": dict(SOLIDITY["settings"]["optimizer"]),
            "remappings": list(REMAPPINGS),
            "outputSelection": {"*": {"*": ["abi", "evm.bytecode"]}},
        },
    }


def compile_contract(name: str, root: Path) -> ContractArtifact:
    """Compile contracts/ with the configured solc and pick out `name`."""
    version = SOLIDITY["version"]
    standard_input = _standard_input(root)
    LOG.info("Compiling %d source(s) with solc %s", len(standard_input["sources"]), version)
    install_solc(version)
    compiled = compile_standard(
        standard_input,
        solc_version=version,
        base_path=str(root),
        allow_paths=[str(root)],
    )
    for source_contracts in compiled.get("contracts", {}).values():
        if name in source_contracts:
            contract = source_contracts[name]
            bytecode = contract["evm"]["bytecode"]["object"]
            if not bytecode.startswith("0x"):
                bytecode = "0x" + bytecode
            return ContractArtifact(name=name, abi=contract["abi"], bytecode=bytecode)
    raise ArtifactError(f"Contract {name} not found in compiler output")


def get_contract_artifact(name: str, root: Optional[Path] = None) -> ContractArtifact:
    root = Path(root) if root is not None else Path.cwd()
    path = artifact_path(name, root)
    if path.exists():
        LOG.debug("Using Hardhat artifact %s", path)
        return read_hardhat_artifact(path, name)
    LOG.info("No artifact at %s, compiling from source", path)
    return compile_contract(name, root)
