import logging

from rich.logging import RichHandler

from lexi.logging_utils import configure_logging


def test_configure_logging_is_idempotent() -> None:
    logger = configure_logging(verbose=True)
    configure_logging(verbose=False)

    assert logger is logging.getLogger("lexi")
    assert len([h for h in logger.handlers if isinstance(h, RichHandler)]) == 1
    assert logger.level == logging.WARNING
    assert logging.getLogger("lexi.llm_client").getEffectiveLevel() == logging.WARNING
