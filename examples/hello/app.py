"""Hello World: the smallest switchyard app.

Demonstrates verb routes, path parameters, a timing middleware that runs
code on both sides of ``next()``, JSON bodies, and the 404 fall-through.

Run:
    python app.py
"""

import time

from switchyard import ASGIApp, Router

router = Router()


async def timing(context, next):
    start = time.monotonic()
    await next()
    context.set_header("X-Response-Time", f"{time.monotonic() - start:.3f}s")


async def index(context, next):
    context.body = "Hello, World!"


async def greet(context, next):
    context.body = f"Hello, {context.params['name']}!"


async def status(context, next):
    context.body = {"status": "ok", "version": "0.1.0"}


router.use(timing)
router.get("/", index)
router.get("/greet/:name", greet)
router.get("/api/status", status)

app = ASGIApp(router)


if __name__ == "__main__":
    app.run()
