"""Fibonacci memo service client.

This module defines a small client wrapper around the service's REST
API.  It uses the ``requests`` library internally and exposes one
method per endpoint:

* :meth:`FibClient.fib` – Fib(n).
* :meth:`FibClient.fib_less` – count of Fibonacci values below a target.
* :meth:`FibClient.memo_count` – count of memos at or below a target.
* :meth:`FibClient.clear` – empty the memo cache.
* :meth:`FibClient.stats` – memo lookup hit/miss counters.
* :meth:`FibClient.wait_until_ready` – poll until the server answers.

Failed calls raise :class:`FibClientError` carrying the HTTP status
code (``None`` for connection errors) and the server's ``detail``
message.

The module can also be run as a script::

    python fibsrv_client.py --base-url http://localhost:8080 fib 20
    python fibsrv_client.py fibless 120
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import time
from typing import Any, Dict, Optional

import requests


logger = logging.getLogger(__name__)


class FibClientError(Exception):
    """Raised when a request to the service fails."""

    def __init__(self, status_code: Optional[int], message: str) -> None:
        super().__init__(f"{status_code}: {message}" if status_code else message)
        self.status_code = status_code
        self.message = message


class FibClient:
    """Client for the Fibonacci memo service."""

    def __init__(
        self,
        base_url: str = "http://localhost:8080",
        *,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL of the service, e.g. ``http://localhost:8080``.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Per-request timeout in seconds.
        """
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str, *, params: Dict[str, Any] | None = None
    ) -> Any:
        """Perform an HTTP request and return the parsed JSON body.

        Raises:
            FibClientError: on a non-2xx response or a transport error.
        """
        url = f"{self.base_url}/v1{path}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                params=params,
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = ""
            if exc.response is not None:
                try:
                    err_json = exc.response.json()
                    detail = err_json.get("detail") if isinstance(err_json, dict) else None
                    message = detail if isinstance(detail, str) else json.dumps(err_json)
                except ValueError:
                    message = exc.response.text
            if not message:
                message = str(exc)
            logger.error("API request failed (%s): %s", status, message)
            raise FibClientError(status, message) from exc
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            raise FibClientError(None, str(exc)) from exc
        if not response.content:
            return None
        return response.json()

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------
    def fib(self, n: int) -> int:
        return self._request("GET", "/fib", params={"n": n})["result"]

    def fib_less(self, target: int) -> int:
        return self._request("GET", "/fibless", params={"target": target})["result"]

    def memo_count(self, target: int) -> int:
        return self._request("GET", "/memocount", params={"target": target})["result"]

    def clear(self) -> None:
        self._request("POST", "/clear")

    def stats(self) -> Dict[str, int]:
        return self._request("GET", "/stats")

    def info(self) -> Dict[str, str]:
        return self._request("GET", "/info")

    def wait_until_ready(self, attempts: int = 10, interval: float = 1.0) -> Dict[str, str]:
        """Poll the info endpoint until the service answers.

        Returns the info payload.  Re-raises the last error once
        ``attempts`` polls have failed.
        """
        for _ in range(max(1, attempts) - 1):
            try:
                return self.info()
            except FibClientError as exc:
                logger.info("Service not ready (%s), retrying in %ss", exc, interval)
                time.sleep(interval)
        return self.info()


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Query the Fibonacci memo service.")
    parser.add_argument("--base-url", default="http://localhost:8080", help="Service base URL")
    parser.add_argument("--timeout", type=float, default=15, help="Request timeout in seconds")
    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("fib", help="Compute Fib(n)").add_argument("n", type=int)
    sub.add_parser("fibless", help="Count Fibonacci values below target").add_argument("target", type=int)
    sub.add_parser("memocount", help="Count memos at or below target").add_argument("target", type=int)
    sub.add_parser("clear", help="Empty the memo cache")
    sub.add_parser("stats", help="Show memo lookup counters")
    args = parser.parse_args(argv)

    client = FibClient(args.base_url, timeout=args.timeout)
    try:
        if args.command == "fib":
            print(client.fib(args.n))
        elif args.command == "fibless":
            print(client.fib_less(args.target))
        elif args.command == "memocount":
            print(client.memo_count(args.target))
        elif args.command == "clear":
            client.clear()
            print("cleared")
        else:
            print(json.dumps(client.stats()))
    except FibClientError as exc:
        print(f"[!] {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(message)s")
    sys.exit(main())
