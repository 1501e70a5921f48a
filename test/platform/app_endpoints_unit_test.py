"""HTTP tests for the shared app endpoints and error mapping"""

from fastapi.testclient import TestClient
import pytest


@pytest.mark.unit
class TestCommonEndpoints:
    def test_health(self, client: TestClient):
        response = client.get('/health')

        assert response.status_code == 200
        assert response.json()['status'] == 'healthy'

    def test_metrics_are_prometheus_text(self, client: TestClient):
        response = client.get('/metrics')

        assert response.status_code == 200
        assert response.headers['content-type'].startswith('text/plain')
        assert 'fira_event_cancellations_total' in response.text


@pytest.mark.unit
class TestIdentityHeader:
    def test_missing_user_header_is_401(self, client: TestClient):
        response = client.get('/api/ticket/my')

        assert response.status_code == 401
        assert response.json() == {'detail': 'Authentication required'}

    @pytest.mark.parametrize('value', ['abc', '0', '-5'])
    def test_malformed_user_header_is_401(self, client: TestClient, value: str):
        response = client.get('/api/notification', headers={'X-User-Id': value})

        assert response.status_code == 401
        assert response.json() == {'detail': 'Invalid user id header'}
