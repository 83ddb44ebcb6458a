"""
Load testing script for the lineup API using locust.

Install: pip install locust
Run:     locust -f backend/loadtests/locustfile.py --host http://localhost:8000

Open http://localhost:8089 in your browser to configure and start the test.
"""
from datetime import date, timedelta

from locust import HttpUser, between, task


class FeedConsumer(HttpUser):
    """Simulates the station website polling the published feeds."""

    wait_time = between(2, 5)
    weight = 6

    @task(3)
    def schedule_json(self):
        self.client.get("/api/v1/schedule/json")

    @task(2)
    def schedule_xml(self):
        self.client.get("/api/v1/schedule/xml")

    @task(1)
    def health_check(self):
        self.client.get("/health")


class Producer(HttpUser):
    """Simulates a producer browsing the weekly grid."""

    wait_time = between(3, 8)
    weight = 4

    def on_start(self):
        """Login on start."""
        response = self.client.post(
            "/api/v1/auth/login",
            json={"email": "admin@lineup-radio.org", "password": "admin123"},
        )
        if response.status_code == 200:
            self.headers = {"Authorization": f"Bearer {response.json().get('access_token', '')}"}
        else:
            self.headers = {}

    @task(4)
    def weekly_grid(self):
        self.client.get(
            f"/api/v1/schedule/slots?selected_date={date.today().isoformat()}",
            name="/api/v1/schedule/slots?week",
        )

    @task(2)
    def day_view(self):
        self.client.get(f"/api/v1/schedule/day/{date.today().isoformat()}", name="/api/v1/schedule/day")

    @task(1)
    def master_grid(self):
        self.client.get("/api/v1/schedule/slots?is_master_schedule=true", name="/api/v1/schedule/slots?master")

    @task(2)
    def day_notes(self):
        today = date.today()
        self.client.get(
            f"/api/v1/day-notes?start_date={today.isoformat()}&end_date={(today + timedelta(days=6)).isoformat()}",
            name="/api/v1/day-notes",
        )

    @task(1)
    def producers(self):
        self.client.get("/api/v1/workers?department=producers", name="/api/v1/workers")

    @task(1)
    def latest_show(self):
        self.client.get("/api/v1/shows/latest", headers=self.headers)
