import argparse
import logging
import os
from datetime import datetime, timezone
from typing import List, Optional

from flask import Flask, request, jsonify

from .errors import InvalidProduct, ProductNotFound
from .models import ProductDraft, ProductPatch, parse_int
from .store import ProductStore


logger = logging.getLogger(__name__)

SERVICE_NAME = "Product Management Service"
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 3000
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def _failure(error: str, status: int):
    return jsonify({"success": False, "error": error}), status


def _timestamp() -> str:
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def create_app(store: Optional[ProductStore] = None) -> Flask:
    app = Flask(__name__)
    # "/api/products/" and "/api/products" reach the same handler
    app.url_map.strict_slashes = False
    products = store if store is not None else ProductStore.seeded()

    @app.get("/health")
    def health():
        return jsonify({
            "status": "Microservice is running",
            "timestamp": _timestamp(),
            "service": SERVICE_NAME,
        }), 200

    @app.get("/api/products")
    def list_products():
        data = products.list_all()
        return jsonify({"success": True, "data": data, "count": len(data)}), 200

    @app.get("/api/products/<pid>")
    def get_product(pid: str):
        return jsonify({"success": True, "data": products.get(parse_int(pid))}), 200

    @app.post("/api/products")
    def create_product():
        draft = ProductDraft.from_json(request.get_json(silent=True))
        prod = products.create(draft)
        return jsonify({
            "success": True,
            "message": "Product created successfully",
            "data": prod,
        }), 201

    @app.put("/api/products/<pid>")
    def update_product(pid: str):
        patch = ProductPatch.from_json(request.get_json(silent=True))
        prod = products.update(parse_int(pid), patch)
        return jsonify({
            "success": True,
            "message": "Product updated successfully",
            "data": prod,
        }), 200

    @app.delete("/api/products/<pid>")
    def delete_product(pid: str):
        prod = products.delete(parse_int(pid))
        return jsonify({
            "success": True,
            "message": "Product deleted successfully",
            "data": prod,
        }), 200

    @app.get("/api/products/price/<min_price>/<max_price>")
    def products_in_price_range(min_price: str, max_price: str):
        data = products.in_price_range(parse_int(min_price), parse_int(max_price))
        return jsonify({
            "success": True,
            "priceRange": {"minPrice": min_price, "maxPrice": max_price},
            "data": data,
            "count": len(data),
        }), 200

    @app.errorhandler(InvalidProduct)
    def invalid_product(exc: InvalidProduct):
        return _failure(exc.message, 400)

    @app.errorhandler(ProductNotFound)
    def product_not_found(exc: ProductNotFound):
        return _failure(exc.message, 404)

    # an unsupported method on a known path is just another unknown route
    @app.errorhandler(404)
    @app.errorhandler(405)
    def route_not_found(_exc):
        return _failure("Route not found", 404)

    return app


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Run the in-memory product management service"
    )
    parser.add_argument(
        "--host",
        default=os.environ.get("HOST", DEFAULT_HOST),
        help="Interface to bind (env HOST, default %(default)s)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=int(os.environ.get("PORT", str(DEFAULT_PORT))),
        help="Port to listen on (env PORT, default %(default)s)",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=os.environ.get("LOG_LEVEL", "INFO"),
        help="Logging level (env LOG_LEVEL, default %(default)s)",
    )
    args = parser.parse_args(argv)
    # argparse does not check defaults against choices
    if args.log_level not in LOG_LEVELS:
        parser.error(f"invalid LOG_LEVEL: {args.log_level!r} (choose from {', '.join(LOG_LEVELS)})")
    return args


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=args.log_level,
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    app = create_app()

    base_url = f"http://{args.host}:{args.port}"
    logger.info("%s started", SERVICE_NAME)
    logger.info("Server running on: %s", base_url)
    logger.info("Health check: %s/health", base_url)
    logger.info("Products API: %s/api/products", base_url)

    # threaded=True: the store lock keeps concurrent handlers consistent
    app.run(host=args.host, port=args.port, threaded=True)
    return 0
