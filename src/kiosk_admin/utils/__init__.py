# Utils package
import logging
import re

RE_DOLLARS = re.compile(r"^-?(\d+(\.\d*)?|\.\d+)$")


def setup_logging(log_file=None, level=logging.INFO):
    handlers = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(message)s",
        handlers=handlers,
    )


def cents_from_dollars(raw):
    """Convert a dollar amount typed by a user ("5.99", "$-1.50", "1,200") to integer cents.

    Raises ValueError when the text is not a dollar amount.
    """
    if raw is None:
        return 0
    if isinstance(raw, (int, float)):
        return int(round(float(raw) * 100))
    text = str(raw).strip().replace("$", "").replace(",", "")
    if not RE_DOLLARS.match(text):
        raise ValueError(f"not a dollar amount: {raw!r}")
    return int(round(float(text) * 100))


def dollars_from_cents(cents):
    try:
        value = int(cents or 0) / 100
    except (ValueError, TypeError):
        value = 0.0
    return f"{value:.2f}"
