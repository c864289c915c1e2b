import pytest

OLD_TICKBIT = "0x1111111111111111111111111111111111111111"
OLD_TICKET = "0x2222222222222222222222222222222222222222"
NEW_ADDRESS = "0xAbCdEf0123456789aBcDeF0123456789AbCdEf01"

TICKBIT_TICKET_SOL = (
    "pragma solidity ^0.8.4;\n"
    "\n"
    "contract TickbitTicket {\n"
    "    Tickbit tickbitContract;\n"
    "    constructor() {\n"
    f"        tickbitContract = Tickbit({OLD_TICKBIT});\n"
    "    }\n"
    "}\n"
)

CONFIG_JS = (
    f'"tickbit" : "{OLD_TICKBIT}",\n'
    f'"tickbitTicket" : "{OLD_TICKET}"\n'
)


def _write(path, text: str):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture
def workspace(tmp_path):
    """A project checkout with its two sibling front-end projects"""
    root = tmp_path / "tickbit"
    _write(root / "scripts" / "release" / "currentTickbitContract.txt", f"TickbitContract deployed to: {NEW_ADDRESS}\n")
    _write(root / "scripts" / "release" / "currentTickbitTicketContract.txt", f"TickbitTicketContract deployed to: {NEW_ADDRESS}\n")
    _write(root / "contracts" / "TickbitTicket.sol", TICKBIT_TICKET_SOL)
    _write(tmp_path / "tickbit-backoffice" / "src" / "solidity" / "config.js", CONFIG_JS)
    _write(tmp_path / "tickbit-web" / "src" / "solidity" / "config.js", CONFIG_JS)
    return root
