"""Resources: declarative REST routers nested under path prefixes.

Demonstrates ``Router(actions)`` wiring, a loader installed with the
``use`` action, mounting one resource inside another, and how params
from the outer mount layer under the inner route's own params.

    GET    /users                      -> list users
    GET    /users/:id                  -> show one user
    POST   /users                      -> create
    GET    /users/:user/posts          -> posts by that user
    GET    /users/:user/posts/:id      -> one post, sees both params

Run:
    python app.py
"""

from switchyard import ASGIApp, HTTPError, Router

USERS = {"1": "ada", "2": "grace"}
POSTS = {"1": {"10": "Notes on the engine"}, "2": {"20": "Compilers"}}


async def load_user(context, next):
    user_id = context.params.get("user")
    if user_id is not None and user_id not in USERS:
        raise HTTPError(status=404, detail=f"No user {user_id}")
    context.user = USERS.get(user_id)
    await next()


async def list_users(context, next):
    context.body = sorted(USERS.values())


async def show_user(context, next):
    name = USERS.get(context.params["id"])
    if name is None:
        raise HTTPError(status=404, detail=f"No user {context.params['id']}")
    context.body = {"id": context.params["id"], "name": name}


async def create_user(context, next):
    context.status = 201


async def list_posts(context, next):
    context.body = {"user": context.user, "posts": sorted(POSTS[context.params["user"]])}


async def show_post(context, next):
    posts = POSTS[context.params["user"]]
    title = posts.get(context.params["id"])
    if title is None:
        raise HTTPError(status=404, detail="No such post")
    context.body = {"user": context.user, "id": context.params["id"], "title": title}


posts = Router({"use": load_user, "index": list_posts, "show": show_post})
users = Router({"index": list_users, "show": show_user, "create": create_user})

router = Router()
router.use("/users/:user/posts", posts)
router.use("/users", users)

app = ASGIApp(router)


if __name__ == "__main__":
    app.run()
