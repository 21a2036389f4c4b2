"""
Concurrent Requests
===================

Sessions and contexts are single-owner. To run requests in parallel, give
every worker its own session and its own RequestContext.
"""

import time
from concurrent.futures import ThreadPoolExecutor

import minireq


def fetch(engine: minireq.Engine, url: str) -> tuple[str, int, int]:
    session, context = minireq.init(url, engine=engine)
    try:
        minireq.get(session, context)
        return url, context.status_code, context.body_length
    except minireq.TransferError as exc:
        return url, 0, exc.context.body_length if exc.context else 0
    finally:
        minireq.close(session, context)


def main() -> None:
    urls = [f"https://httpbin.org/get?id={i}" for i in range(10)]

    with minireq.Engine(timeout=10.0) as engine:
        start = time.perf_counter()
        with ThreadPoolExecutor(max_workers=4) as pool:
            results = list(pool.map(lambda url: fetch(engine, url), urls))
        elapsed = time.perf_counter() - start

    print(f"Fetched {len(results)} URLs in {elapsed:.2f}s")
    for url, status_code, size in results:
        print(f"  {status_code} {size:>6} bytes  {url}")


if __name__ == "__main__":
    main()
