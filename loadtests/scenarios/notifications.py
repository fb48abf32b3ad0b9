"""Notification inbox scenario: riders poll their inbox and mark items read."""

from locust import HttpUser, between, task

from loadtests.helpers.response import failure


class RiderInboxUser(HttpUser):
    """Polls the inbox of riders created by the ordering scenarios."""

    wait_time = between(2, 5)

    def on_start(self):
        self.user_id = "rider-lt-inbox"

    @task(5)
    def poll_unread(self):
        with self.client.get(
            f"/notifications/{self.user_id}",
            params={"unread_only": True, "limit": 20},
            catch_response=True,
            name="GET /notifications/{user_id}",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(failure("Poll inbox", resp))
                return
            self.unread = [n["notification_id"] for n in resp.json()["notifications"]]

    @task(1)
    def mark_read(self):
        for notification_id in getattr(self, "unread", [])[:5]:
            self.client.put(f"/notifications/{notification_id}/read", name="PUT /notifications/{id}/read")
