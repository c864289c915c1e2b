# tickbit_release/deployer.py
# -----------------------------------------------------------------------------
# Deploys a compiled contract (no constructor arguments) to the selected
# network and waits for the receipt.
#
# - Remote networks sign locally with the key from .secret
# - The local development node signs with its first unlocked account
# - Single attempt: any RPC error or reverted deployment is raised as-is
#   (or as DeploymentError) and no address is reported
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from eth_account import Account
from web3 import Web3

from .artifacts import ContractArtifact, get_contract_artifact
from .config import NetworkConfig, load_network
from .errors import DeploymentError

LOG = logging.getLogger(__name__)

DEPLOY_GAS_CAP = 6_000_000
RECEIPT_TIMEOUT_SEC = 300


@dataclass
class Deployer:
    """A web3 connection bound to one network"""
    w3: Web3
    network: NetworkConfig

    @staticmethod
    def connect(network: NetworkConfig, request_timeout_sec: int = 30) -> "Deployer":
        w3 = Web3(Web3.HTTPProvider(network.url, request_kwargs={"timeout": request_timeout_sec}))
        if not w3.is_connected():
            raise DeploymentError(f"Failed to connect to {network.name} RPC")
        return Deployer(w3=w3, network=network)

    def _fee_fields(self) -> Dict[str, Any]:
        # EIP-1559 if the node reports a base fee
        latest = self.w3.eth.get_block("latest")
        if "baseFeePerGas" in latest and latest["baseFeePerGas"] is not None:
            return {
                "maxPriorityFeePerGas": self.w3.to_wei(30, "gwei"),
                "maxFeePerGas": int(latest["baseFeePerGas"]) * 2 + self.w3.to_wei(30, "gwei"),
            }
        return {"gasPrice": self.w3.eth.gas_price}

    def _send_signed(self, factory) -> bytes:
        account = Account.from_key(self.network.accounts[0])
        LOG.info("Deployer account: %s", account.address)
        tx = factory.constructor().build_transaction({
            "chainId": self.network.chain_id,
            "from": account.address,
            "nonce": self.w3.eth.get_transaction_count(account.address),
            **self._fee_fields(),
        })
        try:
            tx["gas"] = min(DEPLOY_GAS_CAP, int(self.w3.eth.estimate_gas(tx) * 1.2))
        except Exception as e:
            LOG.warning("Gas estimation failed (%s), using cap %d", e, DEPLOY_GAS_CAP)
            tx["gas"] = DEPLOY_GAS_CAP
        signed = account.sign_transaction(tx)
        return self.w3.eth.send_raw_transaction(signed.raw_transaction)

    def _send_unlocked(self, factory) -> bytes:
        accounts = self.w3.eth.accounts
        if not accounts:
            raise DeploymentError(f"Node for {self.network.name} exposes no unlocked accounts")
        LOG.info("Deployer account: %s", accounts[0])
        return factory.constructor().transact({"from": accounts[0]})

    def deploy(self, artifact: ContractArtifact) -> str:
        """
        Submit the deployment transaction and block until it is mined.
        Returns the checksummed contract address.
        """
        factory = self.w3.eth.contract(abi=artifact.abi, bytecode=artifact.bytecode)
        if self.network.signs_locally:
            tx_hash = self._send_signed(factory)
        else:
            tx_hash = self._send_unlocked(factory)
        LOG.info("Deploy tx for %s: %s", artifact.name, Web3.to_hex(tx_hash))

        receipt = self.w3.eth.wait_for_transaction_receipt(tx_hash, timeout=RECEIPT_TIMEOUT_SEC)
        if receipt["status"] != 1:
            raise DeploymentError(f"Deployment of {artifact.name} reverted in tx {Web3.to_hex(tx_hash)}")
        address = receipt["contractAddress"]
        if not address:
            raise DeploymentError(f"Receipt for {Web3.to_hex(tx_hash)} has no contract address")
        return Web3.to_checksum_address(address)


def deploy_contract(
    name: str = "Tickbit",
    network: Optional[NetworkConfig] = None,
    root: Optional[Path] = None,
) -> str:
    root = Path(root) if root is not None else Path.cwd()
    network = network or load_network(root=root)
    LOG.info("Deploying %s to %s (chain %d)", name, network.name, network.chain_id)
    artifact = get_contract_artifact(name, root)
    deployer = Deployer.connect(network)
    address = deployer.deploy(artifact)
    print(f"{name}Contract deployed to: {address}")
    return address
