import time

import tessera


def main() -> None:
    # Attaches to a running registry on this port, or starts one with ST2TEST as the authority.
    srv = tessera.run(port=57794, authority="ST2TEST")
    client = srv.client() if isinstance(srv, tessera.TesseraServer) else srv

    for seat, ticket_id in (("A1", 0), ("A2", 1), ("A3", 2)):
        res = client.assign_ticket(ticket_id, 1, "ST1TEST", ticket_id != 2, 100, "Concert", "VIP", seat, block_height=10)
        print(f"assign {ticket_id}: {res}")

    print("transfer 0:", client.transfer_ticket(0, "ST3TEST", caller="ST1TEST"))
    print("transfer 2:", client.transfer_ticket(2, "ST3TEST", caller="ST1TEST"))
    print("burn 1 by stranger:", client.burn_ticket(1, caller="ST3TEST"))
    print("burn 1 by owner:", client.burn_ticket(1, caller="ST1TEST"))

    for ticket_id, ticket, meta in client.list_tickets():
        print(ticket_id, ticket.owner, meta.seat_info)

    try:
        while True:
            time.sleep(3600)
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
