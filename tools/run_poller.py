# tools/run_poller.py
# Usage examples:
#   python3 -m tools.run_poller
#   python3 -m tools.run_poller http://example.com https://python.org --interval 5
#   python3 -m tools.run_poller fake --interval 2 --log-level DEBUG

import argparse
import logging

from linkwatch.config import DEFAULT_TARGETS, Settings
from linkwatch.dispatch.controller import run

FAKE_TARGETS = ("http://up.fake", "http://down.fake", "http://flaky.fake")

def build_settings(args) -> Settings:
    return Settings(
        targets=tuple(args.targets) if args.targets else DEFAULT_TARGETS,
        interval_s=args.interval,
        timeout_s=args.timeout,
        follow_redirects=args.follow_redirects,
        user_agent=args.user_agent,
    )

def run_with_fake(args):
    from linkwatch.prober.fake import FakeProber
    p = FakeProber(
        script={"http://flaky.fake": [True, False] * 50},
        default={"http://up.fake": True},
    )
    run(FAKE_TARGETS, prober=p, settings=build_settings(args))

def run_with_http(args):
    run(settings=build_settings(args))

def build_argparser():
    ap = argparse.ArgumentParser(description="Recurring link status poller")
    ap.add_argument("targets", nargs="*", help="URLs to poll (or 'fake' to use FakeProber); defaults to a built-in list")
    ap.add_argument("--interval", type=float, default=10.0, help="Seconds between a result and the next probe of that target")
    ap.add_argument("--timeout", type=float, default=None, help="Per-probe timeout in seconds (default: httpx default)")
    ap.add_argument("--user-agent", default=None, help="User-Agent header to send")
    ap.add_argument("--no-redirects", dest="follow_redirects", action="store_false", default=True,
                    help="Do not follow redirects (a 3xx still counts as up)")
    ap.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                    help="Logging level for diagnostics (status lines always go to stdout)")
    return ap

if __name__ == "__main__":
    ap = build_argparser()
    args = ap.parse_args()
    logging.basicConfig(level=args.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    if args.interval < 0:
        ap.error("--interval must be >= 0")
    try:
        if args.targets == ["fake"]:
            run_with_fake(args)
        else:
            run_with_http(args)
    except ValueError as e:
        ap.error(str(e))
    except KeyboardInterrupt:
        pass
