import asyncio
import code

from dotenv import load_dotenv

from config import settings
from services.orders_service import OrderService
from stores import build_store


def main() -> None:
    load_dotenv()
    service = OrderService(build_store(settings))

    banner = (
        "Order service shell\n"
        f"Store backend: {settings.order_store}\n"
        "Variables 'service' and 'run' are available. Example:\n"
        ">>> run(service.get_statistics())\n"
    )
    namespace = {"service": service, "run": asyncio.run}
    code.interact(banner=banner, local=namespace)


if __name__ == "__main__":
    main()
