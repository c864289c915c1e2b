# scripts/deploy.py
# Deploys Tickbit to the network in HARDHAT_NETWORK (default: hardhat) and
# prints "TickbitContract deployed to: 0x...".
#
# Usage (from the project root):
#   python scripts/deploy.py
#   HARDHAT_NETWORK=mumbai python scripts/deploy.py > scripts/release/currentTickbitContract.txt

from tickbit_release.cli import deploy_main

if __name__ == "__main__":
    deploy_main()
