from __future__ import annotations

import asyncio
import logging

from dotenv import load_dotenv

from .config import load_settings, log_level_from_env
from .errors import IdeasPusherError
from .service import IdeasPusherService

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


async def _main() -> None:
    settings = load_settings()
    service = IdeasPusherService(settings)
    await service.run()


def main() -> None:
    load_dotenv()
    configure_logging(log_level_from_env())
    try:
        asyncio.run(_main())
    except KeyboardInterrupt:
        raise SystemExit(130)
    except IdeasPusherError as exc:
        logger.error("%s: %s", type(exc).__name__, exc)
        raise SystemExit(1)
    except Exception:
        logger.exception("Unexpected failure")
        raise SystemExit(1)


if __name__ == "__main__":
    main()
