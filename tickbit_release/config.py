# tickbit_release/config.py
# -----------------------------------------------------------------------------
# Network, compiler and path configuration for the Tickbit release tooling
#
# Responsibilities
# - Describe the networks the contracts are deployed to (chain id, RPC url,
#   fork source for the local node, signing accounts)
# - Describe the solc version/optimizer used to build the contracts
# - Read the deployer key from the .secret file at the project root
# - Resolve the files touched by the address propagators
#
# Env (optional, .env is honoured):
#   HARDHAT_NETWORK  network to use (default: hardhat)
#   PROJECT_ID       RPC provider project id embedded in the urls
#   HARDHAT_RPC_URL  url of the local development node
# -----------------------------------------------------------------------------

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

from dotenv import load_dotenv

from .errors import ConfigError

DEFAULT_NETWORK = "hardhat"
DEFAULT_PROJECT_ID = "ry1msjt2tmDTngdZSGWoZ2rcHXUcbBB3"
LOCAL_NODE_URL = "http://127.0.0.1:8545"
SECRET_FILE = ".secret"

ALCHEMY_MUMBAI_URL = "https://polygon-mumbai.g.alchemy.com/v2/{project_id}"
INFURA_MAINNET_URL = "https://polygon-mainnet.infura.io/v3/{project_id}"

# name -> chain id, url template, fork source, whether the network signs with .secret
NETWORKS: Dict[str, Dict] = {
    "hardhat": {
        "chain_id": 1337,
        "url": None,
        "forking": ALCHEMY_MUMBAI_URL,
        "uses_secret": False,
    },
    "mumbai": {
        "chain_id": 80001,
        "url": ALCHEMY_MUMBAI_URL,
        "forking": None,
        "uses_secret": True,
    },
    "mainnet": {
        "chain_id": 137,
        "url": INFURA_MAINNET_URL,
        "forking": None,
        "uses_secret": True,
    },
}

SOLIDITY = {
    "version": "0.8.4",
    "settings": {
        "optimizer": {
            "enabled": True,
            "runs": 200,
        }
    },
}


@dataclass
class NetworkConfig:
    """One resolved entry of NETWORKS"""
    name: str
    chain_id: int
    url: str
    forking_url: Optional[str] = None
    accounts: List[str] = field(default_factory=list)

    @property
    def signs_locally(self) -> bool:
        return bool(self.accounts)


def read_secret(root: Path) -> str:
    p = Path(root) / SECRET_FILE
    if not p.exists():
        raise ConfigError(f"Signing key file not found at {p}")
    key = p.read_text(encoding="utf-8").strip()
    if not key:
        raise ConfigError(f"Signing key file {p} is empty")
    return key


def load_network(name: Optional[str] = None, root: Optional[Path] = None) -> NetworkConfig:
    """
    Resolve a network by name (explicit arg > HARDHAT_NETWORK > default).

    The .secret file is only read for networks that sign with it, so the
    local node works without one.
    """
    load_dotenv()
    name = name or os.getenv("HARDHAT_NETWORK") or DEFAULT_NETWORK
    if name not in NETWORKS:
        known = ", ".join(sorted(NETWORKS))
        raise ConfigError(f"Unknown network '{name}' (known: {known})")

    entry = NETWORKS[name]
    project_id = os.getenv("PROJECT_ID") or DEFAULT_PROJECT_ID

    if entry["url"] is None:
        url = os.getenv("HARDHAT_RPC_URL") or LOCAL_NODE_URL
    else:
        url = entry["url"].format(project_id=project_id)
    forking = entry["forking"].format(project_id=project_id) if entry["forking"] else None

    accounts: List[str] = []
    if entry["uses_secret"]:
        accounts.append(read_secret(root or Path.cwd()))

    return NetworkConfig(
        name=name,
        chain_id=entry["chain_id"],
        url=url,
        forking_url=forking,
        accounts=accounts,
    )


@dataclass
class ReleasePaths:
    """Files read and rewritten by the address propagators, relative to root"""
    root: Path = field(default_factory=Path.cwd)

    @property
    def tickbit_record(self) -> Path:
        return self.root / "scripts" / "release" / "currentTickbitContract.txt"

    @property
    def tickbit_ticket_record(self) -> Path:
        return self.root / "scripts" / "release" / "currentTickbitTicketContract.txt"

    @property
    def tickbit_ticket_source(self) -> Path:
        return self.root / "contracts" / "TickbitTicket.sol"

    @property
    def backoffice_config(self) -> Path:
        return self.root.parent / "tickbit-backoffice" / "src" / "solidity" / "config.js"

    @property
    def web_config(self) -> Path:
        return self.root.parent / "tickbit-web" / "src" / "solidity" / "config.js"

    @property
    def frontend_configs(self) -> List[Path]:
        return [self.backoffice_config, self.web_config]
