import logging
import sys
import uuid

import click

from core import constants
from core.config import settings
from log import (
    set_flow_id,
    setup_logging_to_console,
    setup_logging_to_file,
    setup_seq_logging,
)
from services.wallet_adapter import WalletAdapter, new_wallet_adapter_with_client

# # Initialize logger
logger = logging.getLogger("create_user_wallets")
logger.setLevel(logging.INFO)


def ensure_wallet(adapter: WalletAdapter, user_id: str, check_only: bool = False) -> str:
    address = adapter.get_wallet_address_for(user_id)
    if address != constants.NIL_ADDRESS:
        logger.info("User %s already has wallet %s", user_id, address)
        return address

    if check_only:
        logger.info("User %s has no wallet", user_id)
        return address

    address = adapter.create_wallet(user_id)
    logger.info("Created wallet %s for user %s", address, user_id)
    return address


@click.command()
@click.argument("user_ids", nargs=-1, required=True)
@click.option("--check-only", is_flag=True, help="Only look up existing wallets")
@click.option("--log-file", is_flag=True, help="Also write logs to the app-logs directory")
def main(user_ids, check_only: bool, log_file: bool):
    setup_logging_to_console(level=logging.INFO)
    if log_file:
        log_path = setup_logging_to_file(app="create_user_wallets", level=logging.INFO)
        logger.info("Writing logs to %s", log_path)
    setup_seq_logging(settings.SEQ_SERVER_URL, settings.SEQ_SERVER_API_KEY)
    set_flow_id(str(uuid.uuid4()))

    adapter = new_wallet_adapter_with_client(settings.wallet_options())

    failed = []
    for user_id in user_ids:
        try:
            address = ensure_wallet(adapter, user_id, check_only)
            click.echo(f"{user_id}\t{address}")
        except Exception as e:
            logger.error(
                "An error occurred while creating wallet for %s: %s",
                user_id,
                e,
                exc_info=True,
            )
            failed.append(user_id)

    if failed:
        logger.error("Failed user ids: %s", ", ".join(failed))
        sys.exit(1)


if __name__ == "__main__":
    main()
