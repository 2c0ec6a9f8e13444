"""Run the Vapi sync API server: python -m vapi_sync"""

import uvicorn

from vapi_sync.config import settings


def main():
    uvicorn.run(
        "vapi_sync.main:app",
        host=settings.server_host,
        port=settings.server_port,
        log_level=settings.log_level,
    )


if __name__ == "__main__":
    main()
