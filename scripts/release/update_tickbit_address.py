# scripts/release/update_tickbit_address.py
# Cleans scripts/release/currentTickbitContract.txt and writes the address into
# contracts/TickbitTicket.sol and line 1 of the backoffice/web config.js files.
#
# Usage (from the project root):
#   python scripts/release/update_tickbit_address.py

from tickbit_release.cli import update_tickbit_address_main

if __name__ == "__main__":
    update_tickbit_address_main()
