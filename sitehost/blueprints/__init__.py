from flask import request


def json_object():
    """The request's JSON body if it is an object, else an empty dict."""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def non_text_field(data, *names):
    """Return the first named field that is present but not a string, or None."""
    for name in names:
        if data.get(name) is not None and not isinstance(data[name], str):
            return name
    return None
