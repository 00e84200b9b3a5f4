import argparse
import sys

from matching.engine import rank_catalog
from services.catalog import HostedCatalog, load_catalog
from services.http import ProviderError
from services.settings import Settings, configure_logging

if __name__ == "__main__":
    settings = Settings.from_env()

    parser = argparse.ArgumentParser(description="PartMatch: rank catalog products for a search")
    parser.add_argument("query", type=str)
    parser.add_argument("--catalog", type=str, default=settings.catalog_path)
    parser.add_argument("--hosted", action="store_true", help="read the hosted catalog instead of --catalog")
    parser.add_argument("--top", type=int, default=10)
    parser.add_argument("--log-level", type=str, default=settings.log_level)
    args = parser.parse_args()

    configure_logging(args.log_level)

    try:
        products = HostedCatalog(settings).fetch_products() if args.hosted else load_catalog(args.catalog)
    except (FileNotFoundError, ValueError, ProviderError) as e:
        print(f"Failed to load catalog: {e}", file=sys.stderr)
        raise SystemExit(1)

    df = rank_catalog(args.query, products, top_n=args.top)
    print(df.to_json(orient="records"))
