#!/usr/bin/env python3
"""Startup script for the Big Two game backend"""

import os
import socket

import uvicorn


def get_local_ip() -> str:
    """LAN address so phones on the same network can connect."""
    try:
        with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as s:
            # No packet is sent; connecting a UDP socket only selects a route
            s.connect(("10.255.255.255", 1))
            address = s.getsockname()[0]
    except OSError:
        return "localhost"
    return "localhost" if address.startswith("127.") else address


def main():
    port = int(os.getenv("PORT", 3000))
    host = os.getenv("HOST", "0.0.0.0")

    print("┌──────────────────────────────────────────┐")
    print("│  BIG TWO SERVER STARTED                  │")
    print("├──────────────────────────────────────────┤")
    print(f"│  Local:   http://localhost:{port}")
    print(f"│  Network: http://{get_local_ip()}:{port}")
    print(f"│  WebSocket endpoint: ws://{host}:{port}/ws")
    print("└──────────────────────────────────────────┘")

    uvicorn.run(
        "bigtwo_engine.ws.server:app",
        host=host,
        port=port,
        reload=os.getenv("RELOAD", "false").lower() == "true",
        log_level=os.getenv("LOG_LEVEL", "info").lower()
    )


if __name__ == "__main__":
    main()
