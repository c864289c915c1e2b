# scripts/release/update_tickbit_ticket_address.py
# Cleans scripts/release/currentTickbitTicketContract.txt and writes the
# address into line 2 of the backoffice/web config.js files.
#
# Usage (from the project root):
#   python scripts/release/update_tickbit_ticket_address.py

from tickbit_release.cli import update_tickbit_ticket_address_main

if __name__ == "__main__":
    update_tickbit_ticket_address_main()
