from dataclasses import fields, is_dataclass

from flask import Flask, request, jsonify
from flask_cors import CORS

from minilang import compiler
from minilang.samples import SAMPLES

DEFAULT_CONFIG = {
    "INCLUDE_TRACE": False,
    "MAX_SOURCE_LENGTH": 100000,
}


def ast_to_dict(node):
    """
    Serialize AST to dict recursively
    """
    if node is None:
        return None
    d = {"type": type(node).__name__}
    for f in fields(node):
        if f.name == "lineno":
            continue
        value = getattr(node, f.name)
        if isinstance(value, list):
            d[f.name] = [ast_to_dict(v) for v in value]
        elif is_dataclass(value) or value is None:
            d[f.name] = ast_to_dict(value)
        else:
            d[f.name] = value
    return d


def empty_response(errors):
    return {
        "tokens": [],
        "ast": {},
        "tac": [],
        "output": [],
        "errors": errors,
        "environment": {},
    }


def create_app(test_config=None):
    app = Flask(__name__)
    app.config.from_mapping(DEFAULT_CONFIG)
    app.config.from_prefixed_env("MINILANG")
    if test_config is not None:
        app.config.from_mapping(test_config)
    CORS(app)  # allow cross-origin requests

    @app.route("/compile", methods=["POST"])
    def compile_code():
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            return jsonify(empty_response(["request body must be a JSON object"])), 400
        code = data.get("code")
        if not isinstance(code, str):
            return jsonify(empty_response(["'code' must be a string"])), 400
        if len(code) > app.config["MAX_SOURCE_LENGTH"]:
            return jsonify(empty_response(["source too long"])), 413

        trace = compiler.CollectTrace() if app.config["INCLUDE_TRACE"] else None
        try:
            result = compiler.compile_source(code, trace=trace)
        except Exception as e:
            app.logger.exception("compilation crashed")
            return jsonify(empty_response([f"Unexpected error: {str(e)}"])), 500

        # EOF is implied, leave it out
        tokens = [
            {"type": tok.type, "value": tok.value, "lineno": tok.lineno}
            for tok in result['tokens']
            if tok.type != 'EOF'
        ]
        response = {
            "tokens": tokens,
            "ast": ast_to_dict(result['ast']) if result['ast'] else {},
            "tac": result['tac'],
            "output": result['output'],
            "errors": result['errors'],
            "environment": result['environment'],
        }
        if trace is not None:
            response["trace"] = trace.lines()
        return jsonify(response)

    @app.route("/samples", methods=["GET"])
    def list_samples():
        return jsonify({"samples": sorted(SAMPLES)})

    @app.route("/samples/<name>", methods=["GET"])
    def get_sample(name):
        if name not in SAMPLES:
            return jsonify({"errors": [f"unknown sample '{name}'"]}), 404
        return jsonify({"name": name, "code": SAMPLES[name]})

    return app


app = create_app()

if __name__ == "__main__":
    app.run(debug=True)
