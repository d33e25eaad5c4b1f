import argparse
import getpass
import json
import logging
import sys
from datetime import datetime
from pathlib import Path

from .auth import LoginError
from .catalog import (
    CatalogEditor,
    CatalogParseError,
    CatalogValidationError,
    EditorBusyError,
    StoreOverrides,
    dump_catalog,
    load_catalog_file,
    validate_snapshot,
)
from .client import AdminApiClient, ApiError, AuthRequiredError, ConfigurationError
from .config import AdminConfig
from .tables import catalog_frame, counts_frame, export_csv, stores_frame
from .utils import cents_from_dollars, dollars_from_cents, setup_logging

DEFAULT_CONFIG_FILE = "kiosk_admin.conf"

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_API = 2
EXIT_AUTH = 3
EXIT_CONFIG = 4


def run_action(action, args, client):
    """Run one CLI action; every error becomes a log line and an exit code."""
    try:
        action(args, client)
        return EXIT_OK
    except (CatalogValidationError, CatalogParseError) as e:
        errors = getattr(e, "errors", None) or [str(e)]
        for msg in errors:
            logging.error(f"[CATALOG] {msg}")
        return EXIT_INVALID
    except AuthRequiredError as e:
        logging.error(f"[AUTH] {e}")
        return EXIT_AUTH
    except LoginError as e:
        logging.error(f"[AUTH] {e}")
        return EXIT_AUTH
    except (ApiError, EditorBusyError) as e:
        logging.error(f"[API] {e}")
        return EXIT_API
    except (ConfigurationError, OSError) as e:
        logging.error(f"[CONFIG] {e}")
        return EXIT_CONFIG


def _print_frame(df):
    if df.empty:
        print("(none)")
    else:
        print(df.to_string(index=False))


def _load_editor(args, client):
    """Editor seeded from --file when given, otherwise from the backend."""
    editor = CatalogEditor(client)
    if getattr(args, "file", None):
        editor.load(load_catalog_file(args.file))
    else:
        editor.reload()
    return editor


def _finish_edit(args, editor):
    if getattr(args, "file", None):
        counts = editor.validate()
        dump_catalog(editor.snapshot, args.file)
        logging.info(f"[CATALOG] Saved {args.file}: {counts}")
    else:
        result = editor.save()
        logging.info(f"[CATALOG] Imported to backend: {result.get('counts', editor.snapshot.counts())}")


# --- auth --- #
def cmd_login(args, client):
    password = args.password or getpass.getpass("Admin password: ")
    client.login(args.email, password)
    logging.info("[AUTH] Logged in")


def cmd_logout(args, client):
    client.logout()
    logging.info("[AUTH] Logged out")


# --- stores --- #
def cmd_stores_list(args, client):
    _print_frame(stores_frame(client.list_stores(), args.query))


def cmd_stores_create(args, client):
    client.create_store(args.store_id, args.name, args.password, args.tax_rate)
    logging.info(f"[STORES] Created store {args.store_id}")


def cmd_stores_reset_password(args, client):
    generated = client.reset_store_password(args.store_id, args.password)
    if generated:
        print(f"New kiosk password for {args.store_id}: {generated}")
    logging.info(f"[STORES] Password updated for {args.store_id}")


# --- catalog --- #
def cmd_catalog_export(args, client):
    editor = CatalogEditor(client)
    snapshot = editor.reload()
    if args.csv:
        export_csv(snapshot, args.csv)
    if args.out:
        dump_catalog(snapshot, args.out)
    elif not args.csv:
        print(dump_catalog(snapshot))


def cmd_catalog_import(args, client):
    editor = CatalogEditor(client)
    editor.load(load_catalog_file(args.file))
    editor.dirty = True
    result = editor.save()
    logging.info(f"[CATALOG] Imported {args.file}: {result.get('counts', editor.snapshot.counts())}")


def cmd_catalog_validate(args, client):
    counts = validate_snapshot(load_catalog_file(args.file))
    logging.info(f"[CATALOG] {args.file} is valid: {counts}")


def cmd_catalog_summary(args, client):
    editor = _load_editor(args, client)
    _print_frame(counts_frame(editor.snapshot))
    print()
    _print_frame(catalog_frame(editor.snapshot))


def cmd_catalog_add_category(args, client):
    editor = _load_editor(args, client)
    category = editor.add_category(args.name, args.id or args.name, args.sort)
    logging.info(f"[CATALOG] Added category {category.id}")
    _finish_edit(args, editor)


def cmd_catalog_add_product(args, client):
    editor = _load_editor(args, client)
    product = editor.add_product(
        args.name,
        args.id or args.name,
        args.category,
        description=args.description,
        base_price_cents=args.price,
        image_url=args.image,
    )
    logging.info(f"[CATALOG] Added product {product.id} ({dollars_from_cents(product.base_price_cents)})")
    _finish_edit(args, editor)


def cmd_catalog_add_group(args, client):
    editor = _load_editor(args, client)
    group = editor.add_group(
        args.title,
        args.id or args.title,
        args.product,
        required=args.required,
        min_select=args.min,
        max_select=args.max,
        ui_type=args.ui_type,
        sort=args.sort,
    )
    logging.info(f"[CATALOG] Added modifier group {group.id}")
    _finish_edit(args, editor)


def cmd_catalog_add_option(args, client):
    editor = _load_editor(args, client)
    option = editor.add_option(
        args.name,
        args.id or args.name,
        args.group,
        delta_cents=args.delta,
        sort=args.sort,
    )
    logging.info(f"[CATALOG] Added modifier option {option.id}")
    _finish_edit(args, editor)


# --- money arguments --- #
def _cents(value):
    try:
        return cents_from_dollars(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected a dollar amount like 5.99, got {value!r}")


class _IdAndCents(argparse.Action):
    """Collect `ID DOLLARS|none` pairs as (id, cents); `none` clears the override."""

    def __call__(self, parser, namespace, values, option_string=None):
        item_id, raw = values
        if raw.lower() == "none":
            cents = None
        else:
            try:
                cents = cents_from_dollars(raw)
            except ValueError:
                parser.error(f"{option_string}: expected a dollar amount or none, got {raw!r}")
        pairs = list(getattr(namespace, self.dest, None) or [])
        pairs.append((item_id, cents))
        setattr(namespace, self.dest, pairs)


# --- store overrides --- #
def _fetch_overrides(client, store_id):
    try:
        return client.get_store_overrides(store_id)
    except ApiError as e:
        if e.status != 404:
            raise
        logging.warning(f"[OVERRIDES] No overrides stored for {store_id}; starting empty")
        return StoreOverrides()


def cmd_overrides_show(args, client):
    overrides = _fetch_overrides(client, args.store_id)
    snapshot = CatalogEditor(client).reload()
    for ref in overrides.unknown_references(snapshot):
        logging.warning(f"[OVERRIDES] {args.store_id} overrides unknown {ref}")
    _print_frame(catalog_frame(snapshot, overrides))


def cmd_overrides_set(args, client):
    overrides = _fetch_overrides(client, args.store_id)
    for category_id in args.enable_category or []:
        overrides.set_category_active(category_id, True)
    for category_id in args.disable_category or []:
        overrides.set_category_active(category_id, False)
    for product_id in args.enable_product or []:
        overrides.set_product_active(product_id, True)
    for product_id in args.disable_product or []:
        overrides.set_product_active(product_id, False)
    for product_id, cents in args.price or []:
        overrides.set_product_price_override(product_id, cents)
    for option_id in args.enable_option or []:
        overrides.set_option_active(option_id, True)
    for option_id in args.disable_option or []:
        overrides.set_option_active(option_id, False)
    for option_id, cents in args.delta or []:
        overrides.set_option_delta_override(option_id, cents)
    client.set_store_overrides(args.store_id, overrides)
    logging.info(f"[OVERRIDES] Saved store overrides for {args.store_id}")


# --- reports --- #
def _iso_date(value):
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected YYYY-MM-DD, got {value!r}")


def cmd_report_daily(args, client):
    report = client.daily_report(args.date)
    print(json.dumps(report, indent=2, ensure_ascii=False))


def build_parser():
    parser = argparse.ArgumentParser(prog="kiosk-admin", description="Kiosk ordering admin console")
    parser.add_argument(
        "--config",
        type=str,
        default=DEFAULT_CONFIG_FILE,
        help="Path to configuration file (falls back to environment variables)",
    )
    parser.add_argument("--log-file", type=str, default=None, help="Also log to this file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("login", help="Sign in and store the admin token")
    p.add_argument("--email", required=True)
    p.add_argument("--password", help="Prompted when omitted")
    p.set_defaults(func=cmd_login)

    p = sub.add_parser("logout", help="Forget the stored admin token")
    p.set_defaults(func=cmd_logout)

    stores = sub.add_parser("stores", help="Manage stores").add_subparsers(dest="action", required=True)
    p = stores.add_parser("list")
    p.add_argument("--query", help="Filter by store id or name")
    p.set_defaults(func=cmd_stores_list)
    p = stores.add_parser("create")
    p.add_argument("store_id")
    p.add_argument("name")
    p.add_argument("--password", required=True, help="Kiosk password")
    p.add_argument("--tax-rate", type=float, default=None)
    p.set_defaults(func=cmd_stores_create)
    p = stores.add_parser("reset-password")
    p.add_argument("store_id")
    p.add_argument("--password", help="New password (backend generates one when omitted)")
    p.set_defaults(func=cmd_stores_reset_password)

    catalog = sub.add_parser("catalog", help="Global catalog").add_subparsers(
        dest="action", required=True
    )
    p = catalog.add_parser("export")
    p.add_argument("--out", help="Write JSON to this file instead of stdout")
    p.add_argument("--csv", help="Also write one CSV per collection into this directory")
    p.set_defaults(func=cmd_catalog_export)
    p = catalog.add_parser("import")
    p.add_argument("file")
    p.set_defaults(func=cmd_catalog_import)
    p = catalog.add_parser("validate")
    p.add_argument("file")
    p.set_defaults(func=cmd_catalog_validate)
    p = catalog.add_parser("summary")
    p.add_argument("--file", help="Summarize a local JSON file instead of the backend")
    p.set_defaults(func=cmd_catalog_summary)

    p = catalog.add_parser("add-category")
    p.add_argument("name")
    p.add_argument("--id")
    p.add_argument("--sort", type=int, default=0)
    p.add_argument("--file", help="Edit a local JSON file instead of the backend")
    p.set_defaults(func=cmd_catalog_add_category)

    p = catalog.add_parser("add-product")
    p.add_argument("name")
    p.add_argument("--id")
    p.add_argument("--category", required=True)
    p.add_argument("--price", type=_cents, default=0, help="Base price in dollars")
    p.add_argument("--description", default="")
    p.add_argument("--image", default=None)
    p.add_argument("--file", help="Edit a local JSON file instead of the backend")
    p.set_defaults(func=cmd_catalog_add_product)

    p = catalog.add_parser("add-group")
    p.add_argument("title")
    p.add_argument("--id")
    p.add_argument("--product", required=True)
    p.add_argument("--required", action="store_true")
    p.add_argument("--min", type=int, default=0)
    p.add_argument("--max", type=int, default=1)
    p.add_argument("--ui-type", choices=["radio", "chips"], default="radio")
    p.add_argument("--sort", type=int, default=0)
    p.add_argument("--file", help="Edit a local JSON file instead of the backend")
    p.set_defaults(func=cmd_catalog_add_group)

    p = catalog.add_parser("add-option")
    p.add_argument("name")
    p.add_argument("--id")
    p.add_argument("--group", required=True)
    p.add_argument("--delta", type=_cents, default=0, help="Price delta in dollars (may be negative)")
    p.add_argument("--sort", type=int, default=0)
    p.add_argument("--file", help="Edit a local JSON file instead of the backend")
    p.set_defaults(func=cmd_catalog_add_option)

    overrides = sub.add_parser("overrides", help="Per-store overrides").add_subparsers(
        dest="action", required=True
    )
    p = overrides.add_parser("show")
    p.add_argument("store_id")
    p.set_defaults(func=cmd_overrides_show)
    p = overrides.add_parser("set")
    p.add_argument("store_id")
    p.add_argument("--enable-category", action="append", metavar="ID")
    p.add_argument("--disable-category", action="append", metavar="ID")
    p.add_argument("--enable-product", action="append", metavar="ID")
    p.add_argument("--disable-product", action="append", metavar="ID")
    p.add_argument("--price", nargs=2, action=_IdAndCents, metavar=("PRODUCT_ID", "DOLLARS|none"))
    p.add_argument("--enable-option", action="append", metavar="ID")
    p.add_argument("--disable-option", action="append", metavar="ID")
    p.add_argument("--delta", nargs=2, action=_IdAndCents, metavar=("OPTION_ID", "DOLLARS|none"))
    p.set_defaults(func=cmd_overrides_set)

    report = sub.add_parser("report", help="Reports").add_subparsers(dest="action", required=True)
    p = report.add_parser("daily")
    p.add_argument("--date", type=_iso_date, default=None, help="YYYY-MM-DD (default: today)")
    p.set_defaults(func=cmd_report_daily)

    return parser


def load_config(path):
    if Path(path).exists():
        return AdminConfig.from_config_file(path)
    return AdminConfig.from_env()


def main(argv=None, client=None):
    args = build_parser().parse_args(argv)
    setup_logging(args.log_file, logging.DEBUG if args.verbose else logging.INFO)
    if client is None:
        try:
            client = AdminApiClient(load_config(args.config))
        except (ConfigurationError, OSError) as e:
            logging.error(f"[CONFIG] {e}")
            return EXIT_CONFIG
    return run_action(args.func, args, client)


if __name__ == "__main__":
    sys.exit(main())
