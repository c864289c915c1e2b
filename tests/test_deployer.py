from unittest import mock

import pytest
from eth_account import Account

from tickbit_release import deployer as deployer_mod
from tickbit_release.artifacts import ContractArtifact
from tickbit_release.config import NetworkConfig
from tickbit_release.deployer import Deployer, deploy_contract
from tickbit_release.errors import DeploymentError

KEY = "0x" + "11" * 32
CONTRACT = "0x5FbDB2315678afecb367f032d93F642f64180aa3"
ARTIFACT = ContractArtifact(name="Tickbit", abi=[], bytecode="0x6080")

LOCAL = NetworkConfig(name="hardhat", chain_id=1337, url="http://127.0.0.1:8545")
MUMBAI = NetworkConfig(name="mumbai", chain_id=80001, url="https://rpc.invalid", accounts=[KEY])


def _w3(status=1):
    w3 = mock.MagicMock()
    w3.eth.accounts = ["0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"]
    w3.eth.get_block.return_value = {}
    w3.eth.gas_price = 1_000_000_000
    w3.eth.get_transaction_count.return_value = 0
    w3.eth.estimate_gas.return_value = 100_000
    w3.eth.send_raw_transaction.return_value = b"\x02" * 32
    w3.eth.wait_for_transaction_receipt.return_value = {"status": status, "contractAddress": CONTRACT.lower()}
    factory = w3.eth.contract.return_value
    factory.constructor.return_value.transact.return_value = b"\x01" * 32
    factory.constructor.return_value.build_transaction.side_effect = lambda params: {**params, "data": "0x6080", "value": 0}
    return w3


def test_local_node_deploys_from_unlocked_account():
    w3 = _w3()
    address = Deployer(w3=w3, network=LOCAL).deploy(ARTIFACT)

    assert address == CONTRACT
    w3.eth.contract.assert_called_once_with(abi=[], bytecode="0x6080")
    w3.eth.contract.return_value.constructor.assert_called_once_with()
    w3.eth.contract.return_value.constructor.return_value.transact.assert_called_once_with(
        {"from": w3.eth.accounts[0]}
    )
    w3.eth.send_raw_transaction.assert_not_called()


def test_remote_network_signs_with_secret():
    w3 = _w3()
    address = Deployer(w3=w3, network=MUMBAI).deploy(ARTIFACT)

    assert address == CONTRACT
    params = w3.eth.contract.return_value.constructor.return_value.build_transaction.call_args.args[0]
    assert params["chainId"] == 80001
    assert params["from"] == Account.from_key(KEY).address
    assert params["gasPrice"] == 1_000_000_000
    w3.eth.send_raw_transaction.assert_called_once()


def test_eip1559_fees_when_base_fee_reported():
    w3 = _w3()
    w3.eth.get_block.return_value = {"baseFeePerGas": 50}
    w3.to_wei.side_effect = lambda value, unit: value * 10**9
    Deployer(w3=w3, network=MUMBAI).deploy(ARTIFACT)
    params = w3.eth.contract.return_value.constructor.return_value.build_transaction.call_args.args[0]
    assert "gasPrice" not in params
    assert params["maxFeePerGas"] == 100 + 30 * 10**9


def test_rejected_deployment_raises():
    with pytest.raises(DeploymentError):
        Deployer(w3=_w3(status=0), network=LOCAL).deploy(ARTIFACT)


def test_rpc_failure_propagates():
    w3 = _w3()
    w3.eth.send_raw_transaction.side_effect = ValueError({"code": -32000, "message": "insufficient funds"})
    with pytest.raises(ValueError):
        Deployer(w3=w3, network=MUMBAI).deploy(ARTIFACT)


def test_connect_fails_when_node_unreachable():
    with mock.patch.object(deployer_mod, "Web3") as web3_cls:
        web3_cls.return_value.is_connected.return_value = False
        with pytest.raises(DeploymentError):
            Deployer.connect(LOCAL)


def test_deploy_contract_prints_address(tmp_path, capsys):
    deployer = mock.MagicMock()
    deployer.deploy.return_value = CONTRACT
    with mock.patch.object(deployer_mod, "get_contract_artifact", return_value=ARTIFACT) as lookup, \
         mock.patch.object(Deployer, "connect", return_value=deployer):
        assert deploy_contract("Tickbit", network=LOCAL, root=tmp_path) == CONTRACT

    lookup.assert_called_once_with("Tickbit", tmp_path)
    out = capsys.readouterr().out
    assert out == f"TickbitContract deployed to: {CONTRACT}\n"
    # the bookkeeping window: address plus newline
    assert out[-43:][:42] == CONTRACT


def test_deploy_contract_reports_nothing_on_rejection(tmp_path, capsys):
    deployer = mock.MagicMock()
    deployer.deploy.side_effect = DeploymentError("reverted")
    with mock.patch.object(deployer_mod, "get_contract_artifact", return_value=ARTIFACT), \
         mock.patch.object(Deployer, "connect", return_value=deployer):
        with pytest.raises(DeploymentError):
            deploy_contract("Tickbit", network=LOCAL, root=tmp_path)
    assert capsys.readouterr().out == ""
