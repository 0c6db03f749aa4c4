from __future__ import annotations


def test_run_auto_attaches_to_existing_server() -> None:
    """If a server is reachable at host/port, tessera.run() should attach by default."""

    import tessera
    from tessera.core.registry import TicketRegistry

    server = tessera.run(host="127.0.0.1", port=0, registry=TicketRegistry(), new_server=True)

    attached = tessera.run(host=server.host, port=server.port)

    from tessera.sdk.client import TesseraClient

    assert isinstance(attached, TesseraClient)
    assert attached.base_url.rstrip("/") == f"http://{server.host}:{server.port}"


def test_started_server_serves_its_registry() -> None:
    import tessera
    from tessera.core.registry import TicketRegistry
    from tessera.runtime.server import TesseraServer

    reg = TicketRegistry()
    server = tessera.run(host="127.0.0.1", port=0, authority="ST2TEST", registry=reg, new_server=True)
    assert isinstance(server, TesseraServer)

    client = server.client()
    assert client.assign_ticket(0, 1, "ST1TEST", True, 100, "Concert", "VIP", "A1").ok
    assert reg.verify_ticket(0, "ST1TEST").value is True
    assert client.registry_info()["authority"] == "ST2TEST"


def test_run_new_server_forces_start_even_if_env_url_is_set() -> None:
    import os

    import tessera
    from tessera.core.registry import TicketRegistry

    s1 = tessera.run(host="127.0.0.1", port=0, registry=TicketRegistry(), new_server=True)

    os.environ["TESSERA_URL"] = f"http://{s1.host}:{s1.port}"
    try:
        s2 = tessera.run(host="127.0.0.1", port=0, registry=TicketRegistry(), new_server=True)
        attached = tessera.run(host="127.0.0.1", port=0)
    finally:
        os.environ.pop("TESSERA_URL", None)

    from tessera.runtime.server import TesseraServer
    from tessera.sdk.client import TesseraClient

    assert isinstance(s2, TesseraServer)
    assert (s2.host, s2.port) != (s1.host, s1.port)
    assert isinstance(attached, TesseraClient)
    assert attached.base_url == f"http://{s1.host}:{s1.port}"
