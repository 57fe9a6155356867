#!/usr/bin/env python3
"""HTTP API: convert IPFS CIDs to ENS contenthash values (EIP-1577).

Endpoints:
  GET /contenthash/<cid>
    - 200: {"cid": "...", "version": "v1", "codec": "dag-pb", "contenthash": "0xe301..."}
    - 400: {"error": "invalid_character", "message": "...", "cid": "..."}

  POST /contenthash/batch
    - Body: {"cids": ["Qm...", "bafy...", ...]}
    - 200: {"results": {"Qm...": {...}, ...}, "errors": {"bad": {...}}, ...}

  GET /contenthash/decode/<contenthash>
    - 200: {"contenthash": "0xe301...", "namespace": "ipfs", "cid": "bafy...", ...}

Production: gunicorn -c gunicorn_config.py contenthash_api:app
"""

from functools import lru_cache

from flasgger import Swagger
from flask import Flask, jsonify, request

from cid_codec import CIDVersion, parse_cid
from cid_config import load_settings
from cid_contenthash import (
    content_hash_namespace,
    decode_content_hash,
    encode_content_hash_bytes,
)
from cid_errors import CIDError

settings = load_settings()

app = Flask(__name__)
app.config["MAX_BATCH_SIZE"] = settings["MAX_BATCH_SIZE"]

if settings["ENABLE_SWAGGER"]:
    swagger_config = {
        "headers": [],
        "specs": [
            {
                "endpoint": "apispec",
                "route": "/apispec.json",
                "rule_filter": lambda rule: True,
                "model_filter": lambda tag: True,
            }
        ],
        "static_url_path": "/flasgger_static",
        "swagger_ui": True,
        "specs_route": "/api-docs"
    }

    swagger_template = {
        "swagger": "2.0",
        "info": {
            "title": "IPFS CID → ENS contenthash API",
            "description": "Encode IPFS CIDs as EIP-1577 content hashes and decode them back",
            "version": "1.0.0"
        },
        "basePath": "/",
    }

    swagger = Swagger(app, config=swagger_config, template=swagger_template)


# Encoding is pure, so repeated CIDs are served from memory.
# Failures raise and are never cached.
@lru_cache(maxsize=settings["CACHE_SIZE"])
def _cached_encode(cid: str) -> dict:
    parsed = parse_cid(cid)
    return {
        "cid": cid,
        "version": CIDVersion.V0.value if parsed.version == 0 else CIDVersion.V1.value,
        "codec": parsed.codec_name or parsed.codec,
        "hash_function": parsed.multihash.name or parsed.multihash.function_code,
        "digest_length": parsed.multihash.digest_length,
        "contenthash": "0x" + encode_content_hash_bytes(parsed).hex(),
    }


def _error_body(error: CIDError, cid: str) -> dict:
    return {"error": error.code, "message": str(error), "cid": cid}


@app.get("/contenthash/<cid>")
def get_contenthash(cid: str):
    """
    Encode a CID as an ENS contenthash.
    ---
    tags:
      - Content hash
    parameters:
      - name: cid
        in: path
        type: string
        required: true
        description: IPFS CID (Qm... or bafy...)
        example: QmRAQB6YaCyidP37UdDnjFY5vQuiBrcqdyoW1CuDgwxkD4
    responses:
      200:
        description: CID encoded
        schema:
          type: object
          properties:
            cid:
              type: string
            version:
              type: string
            codec:
              type: string
            hash_function:
              type: string
            digest_length:
              type: integer
            contenthash:
              type: string
        example:
          cid: QmRAQB6YaCyidP37UdDnjFY5vQuiBrcqdyoW1CuDgwxkD4
          version: v0
          codec: dag-pb
          hash_function: sha2-256
          digest_length: 32
          contenthash: "0xe3010170122029f2d17be6139079dc48696d1f582a8530eb9805b561eda517e22a892c7e3f1f"
      400:
        description: Malformed or unsupported CID
        schema:
          type: object
          properties:
            error:
              type: string
            message:
              type: string
            cid:
              type: string
    """
    cid = cid.strip()
    try:
        return jsonify(_cached_encode(cid))
    except CIDError as e:
        app.logger.warning("Rejected CID %r: %s", cid, e)
        return jsonify(_error_body(e, cid)), 400


@app.post("/contenthash/batch")
def encode_batch():
    """
    Batch encode multiple CIDs.
    ---
    tags:
      - Content hash
    parameters:
      - name: body
        in: body
        required: true
        schema:
          type: object
          required:
            - cids
          properties:
            cids:
              type: array
              items:
                type: string
              description: Array of IPFS CIDs to encode
              example: ["QmRAQB6YaCyidP37UdDnjFY5vQuiBrcqdyoW1CuDgwxkD4", "bafybeihkoviema7g3gxyt6la7v4mbgn2wh5qoxmkvqmv7k7n7qlomg4elu"]
    responses:
      200:
        description: Batch results
        schema:
          type: object
          properties:
            results:
              type: object
              description: Dictionary mapping CID to its encoding
            errors:
              type: object
              description: Dictionary mapping CID to its error
            total_requested:
              type: integer
            total_encoded:
              type: integer
            total_failed:
              type: integer
      400:
        description: Bad request (invalid input)
    """
    if not request.is_json:
        return jsonify({"error": "Content-Type must be application/json"}), 400

    data = request.get_json(silent=True)
    if not isinstance(data, dict) or "cids" not in data:
        return jsonify({"error": "Missing 'cids' field in request body"}), 400

    cids = data["cids"]
    if not isinstance(cids, list) or not all(isinstance(c, str) for c in cids):
        return jsonify({"error": "'cids' must be an array of strings"}), 400

    max_batch_size = app.config["MAX_BATCH_SIZE"]
    if len(cids) > max_batch_size:
        return jsonify({
            "error": f"Batch size exceeds maximum of {max_batch_size}",
            "received": len(cids)
        }), 400

    # Remove duplicates while preserving order
    unique_cids = list(dict.fromkeys(c.strip() for c in cids))

    results = {}
    errors = {}
    for cid in unique_cids:
        try:
            results[cid] = _cached_encode(cid)
        except CIDError as e:
            errors[cid] = _error_body(e, cid)

    if errors:
        app.logger.warning("Batch rejected %d of %d CIDs", len(errors), len(unique_cids))

    return jsonify({
        "results": results,
        "errors": errors,
        "total_requested": len(cids),
        "total_encoded": len(results),
        "total_failed": len(errors)
    }), 200


@app.get("/contenthash/decode/<value>")
def decode_contenthash(value: str):
    """
    Decode an ENS contenthash back to a CID.
    ---
    tags:
      - Content hash
    parameters:
      - name: value
        in: path
        type: string
        required: true
        description: Hex content hash, with or without 0x
        example: "0xe3010170122029f2d17be6139079dc48696d1f582a8530eb9805b561eda517e22a892c7e3f1f"
    responses:
      200:
        description: Content hash decoded
      400:
        description: Malformed or unsupported content hash
    """
    try:
        cid = decode_content_hash(value)
        if cid is None:
            return jsonify({"contenthash": value, "cid": None}), 200
        body = {
            "contenthash": value,
            "namespace": content_hash_namespace(value),
            "cid": cid.encode("base32"),
            "codec": cid.codec_name or cid.codec,
            "hash_function": cid.multihash.name or cid.multihash.function_code,
        }
        if cid.is_v0_compatible:
            body["cidv0"] = str(cid.to_v0())
        return jsonify(body), 200
    except CIDError as e:
        app.logger.warning("Rejected content hash %r: %s", value, e)
        return jsonify({"error": e.code, "message": str(e), "contenthash": value}), 400


@app.get("/health")
def health():
    """
    Health check endpoint.
    ---
    tags:
      - System
    responses:
      200:
        description: Service is healthy
        schema:
          type: object
          properties:
            status:
              type: string
              example: ok
    """
    return jsonify({"status": "ok"})


if __name__ == "__main__":
    # For development: single-threaded Flask server
    # For production: use Gunicorn (see gunicorn_config.py)
    app.run(host="0.0.0.0", port=settings["PORT"], debug=False, threaded=True)
