"""
Basic Requests
==============

GET, POST and PUT with form data and custom headers. Every request fills a
RequestContext with the status code and the accumulated body.
"""

import minireq


def main() -> None:
    minireq.global_init(timeout=10.0)
    try:
        # ── GET ──────────────────────────────────────────────────────────
        session, context = minireq.init("https://httpbin.org/get")
        try:
            minireq.get(session, context)
            print(f"GET  → {context.status_code} ({context.body_length} bytes)")
        finally:
            minireq.close(session, context)
        print()

        # ── POST form data ───────────────────────────────────────────────
        session, context = minireq.init("https://httpbin.org/post")
        try:
            minireq.post(session, context, ["name", "a b", "lang", "python"])
            print(f"POST → {context.status_code}")
            print(context.text)
        finally:
            minireq.close(session, context)
        print()

        # ── PUT with headers ─────────────────────────────────────────────
        session, context = minireq.init("https://httpbin.org/put")
        try:
            minireq.put_with_headers(
                session,
                context,
                ["id", "42"],
                ["Authorization: Bearer token", "X-Request-Id: abc-123"],
            )
            print(f"PUT  → {context.status_code}")
        finally:
            minireq.close(session, context)
    finally:
        minireq.global_cleanup()


if __name__ == "__main__":
    main()
