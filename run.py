import argparse
import json
import logging
import sys

from sitecrawl import config
from sitecrawl.api import CrawlService
from sitecrawl.container import Container
from sitecrawl.exceptions import CrawlError
from sitecrawl.utils.datetime_utils import millis_to_iso


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="sitecrawl", description="Crawl web pages and extract readable content")
    sub = parser.add_subparsers(dest="command", required=True)

    page = sub.add_parser("page", help="crawl a single page")
    page.add_argument("url")
    page.add_argument("--user-agent", default=None)

    site = sub.add_parser("site", help="breadth-first crawl from a seed URL")
    site.add_argument("url")
    site.add_argument("--max-depth", type=int, default=2)
    site.add_argument("--max-pages", type=int, default=50)
    site.add_argument("--follow-external", action="store_true")
    site.add_argument("--ignore-robots", action="store_true")
    site.add_argument("--ignore-crawl-delay", action="store_true")

    robots = sub.add_parser("robots", help="check robots.txt for a URL")
    robots.add_argument("url")
    return parser


def _page_summary(result) -> dict:
    payload = result.to_dict()
    # Full HTML is noise on a terminal
    payload.pop("content", None)
    payload["crawledAtIso"] = millis_to_iso(result.crawled_at)
    return payload


def main(argv=None, service: CrawlService = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=config.log_level(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    service = service or CrawlService.from_container(Container())

    try:
        if args.command == "page":
            output = _page_summary(service.crawl_webpage(args.url, user_agent=args.user_agent))
        elif args.command == "site":
            results = service.crawl_website(
                args.url,
                max_depth=args.max_depth,
                max_pages=args.max_pages,
                follow_external_links=args.follow_external,
                respect_robots_txt=not args.ignore_robots,
                # None keeps the configured SITECRAWL_HONOR_CRAWL_DELAY
                honor_crawl_delay=False if args.ignore_crawl_delay else None,
            )
            output = {"pages": [_page_summary(r) for r in results], "pageCount": len(results)}
        else:
            output = service.check_robots_txt(args.url).to_dict()
    except CrawlError as e:
        print(json.dumps({"error": e.to_dict()}, indent=2), file=sys.stderr)
        return 1
    except ValueError as e:
        print(json.dumps({"error": {"message": str(e)}}, indent=2), file=sys.stderr)
        return 2

    print(json.dumps(output, indent=2))
    # A site crawl with zero successful pages counts as failed
    if args.command == "site" and not output["pages"]:
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
