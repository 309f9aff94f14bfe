"""Path parameter converters.

Converters apply to the brace syntax (``{id:int}``). ``:name`` captures
always use ``str``; ``*name`` captures use ``SPLAT``.
"""


# converter name -> regex fragment for one capture
CONVERTERS: dict[str, str] = {
    "str": r"[^/]+",
    "int": r"\d+",
    "float": r"\d+(?:\.\d+)?",
    "path": r".+",
}

# regex for ``*splat`` captures; may be empty, may span slashes
SPLAT = r".*?"
