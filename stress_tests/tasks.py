from locust import HttpUser, task, between

_jpeg = b'\xff\xd8\xff\xe0\x00\x10JFIF\x00\x01\x01\x00\x00\x01\x00\x01\x00\x00\xff\xd9'


class AsyncLocustTask(HttpUser):
    wait_time = between(0.01, 0.05)

    @task(5)
    def get_health(self):
        self.client.get('/health', name='Health check')

    @task
    def simulate_swap(self):
        files = {'source': ('source.jpg', _jpeg, 'image/jpeg'), 'target': ('target.jpg', _jpeg, 'image/jpeg')}
        self.client.post('/api/simulate-swap', files=files, name='Simulate swap')
