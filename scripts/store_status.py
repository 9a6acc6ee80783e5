from account_store import get_settings, initialize
from account_store.logging_config import configure_logging


def main() -> None:
    settings = get_settings()
    configure_logging(settings)
    store = initialize(settings)
    try:
        print("BACKEND:", store.backend_name)
        print("HAS_USERS:", store.has_users())
    finally:
        store.dispose()


if __name__ == "__main__":
    main()
