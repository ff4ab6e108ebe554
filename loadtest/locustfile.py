import random
import string
from threading import Lock
from locust import HttpUser, task, between


_ids_lock = Lock()
_ids = []


def _rand_name() -> str:
    return "prod-" + "".join(random.choice(string.ascii_lowercase) for _ in range(6))


def _rand_price() -> int:
    return random.randint(100, 60000)


class ProductServiceUser(HttpUser):
    wait_time = between(0.05, 0.15)

    @task(1)
    def health(self):
        self.client.get("/health", name="GET /health")

    @task(5)
    def list_products(self):
        self.client.get("/api/products", name="GET /api/products")

    @task(3)
    def filter_by_price(self):
        low = random.randint(0, 30000)
        high = low + random.randint(0, 30000)
        self.client.get(
            f"/api/products/price/{low}/{high}",
            name="GET /api/products/price/:minPrice/:maxPrice",
        )

    @task(3)
    def create_and_get(self):
        payload = {"name": _rand_name(), "price": _rand_price(), "stock": random.randint(0, 100)}
        r = self.client.post("/api/products", json=payload, name="POST /api/products")
        if r.status_code == 201:
            pid = r.json().get("data", {}).get("id")
            if isinstance(pid, int):
                with _ids_lock:
                    _ids.append(pid)
                self.client.get(f"/api/products/{pid}", name="GET /api/products/:id")

    @task(1)
    def update_or_delete(self):
        with _ids_lock:
            pid = random.choice(_ids) if _ids else None
        if pid is None:
            return
        if random.random() < 0.5:
            self.client.put(
                f"/api/products/{pid}",
                json={"price": _rand_price(), "stock": random.randint(0, 100)},
                name="PUT /api/products/:id",
            )
        else:
            # another user may have deleted it first; 404 is an expected outcome
            with self.client.delete(
                f"/api/products/{pid}", name="DELETE /api/products/:id", catch_response=True
            ) as r:
                if r.status_code in (200, 404):
                    r.success()
            with _ids_lock:
                try:
                    _ids.remove(pid)
                except ValueError:
                    pass
