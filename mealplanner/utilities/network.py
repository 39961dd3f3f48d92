"""LAN address lookup used when announcing the planner API on startup."""
import logging
import socket

logger = logging.getLogger(__name__)

LOOPBACK: str = "127.0.0.1"


def get_local_ip(probe_host: str = "8.8.8.8", probe_port: int = 80) -> str:
    """Address of the interface the OS would route `probe_host` through.

    Connecting a UDP socket sends nothing; it only selects a source address.
    Falls back to the loopback address when no route is available.
    """
    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    try:
        sock.connect((probe_host, probe_port))
        return str(sock.getsockname()[0])
    except OSError as e:
        logger.debug(f"No LAN route for {probe_host}: {e}")
        return LOOPBACK
    finally:
        sock.close()
