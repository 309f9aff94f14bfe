"""Hello World — the simplest waypoint app.

Demonstrates plain and JSON return values, colon and brace captures,
optional groups, and Response chaining.

Run:
    python app.py
"""

from waypoint import App, Response, json

app = App()


@app.get("/")
def index(query):
    return "Hello, World!"


@app.get("/greet/:name")
def greet(name, query):
    return f"Hello, {name}!"


@app.get("/users/{id:int}")
def user(id, query):
    return json({"id": id, **query})


@app.get("/posts(/:slug)")
def posts(slug, query):
    if slug is None:
        return json(["first-post", "second-post"])
    return json({"slug": slug})


@app.get("/api/status")
def status(query):
    return {"status": "ok", "version": "0.1.0"}


@app.post("/custom")
def custom(query):
    return Response("Created").with_status(201).with_header("X-Custom", "waypoint")


if __name__ == "__main__":
    app.run()
