"""Tests for RouteGuardMiddleware.

Requests run through the real ASGI stack with follow_redirects=False so the
Location header can be asserted directly.
"""

import unittest
from datetime import datetime, timedelta, timezone

from fastapi.testclient import TestClient

from api.main import create_app
from api.middleware.route_guard import is_cms_login_path, is_cms_path, is_excluded_path
from api.security import SESSION_COOKIE_NAME
from domain.model.user import Role, User
from services.session_service import SessionTokenIssuer

SECRET = 'guard-test-secret'


def make_user(role: Role) -> User:
    now = datetime.now(timezone.utc)
    return User(
        id='665f1c2e8b3e4a0012345678',
        email=f'{role.value}@example.com',
        password_hash='$2b$10$hash',
        first_name='Test',
        last_name=role.value.title(),
        phone='123456789',
        address='Test Street',
        city='Warsaw',
        postal='00-000',
        country='Poland',
        role=role,
        activated=True,
        deleted=False,
        banned=False,
        created_at=now,
        updated_at=now,
    )


class RouteGuardTestCase(unittest.TestCase):

    def setUp(self):
        self.issuer = SessionTokenIssuer(SECRET)
        self.client = TestClient(create_app(session_issuer=self.issuer), follow_redirects=False)

    def get(self, path: str, token: str | None = None):
        headers = {'Cookie': f'{SESSION_COOKIE_NAME}={token}'} if token else {}
        return self.client.get(path, headers=headers)

    def token_for(self, role: Role) -> str:
        return self.issuer.issue(make_user(role))


class TestUnauthenticated(RouteGuardTestCase):

    def test_cms_without_session_redirects_to_login(self):
        response = self.get('/en/cms')

        self.assertEqual(response.status_code, 307)
        self.assertEqual(response.headers['location'], '/en/cms/login')

    def test_redirect_keeps_supported_locale(self):
        response = self.get('/pl/cms/dashboard')
        self.assertEqual(response.headers['location'], '/pl/cms/login')

    def test_unsupported_locale_redirects_with_default(self):
        response = self.get('/fr/cms/dashboard')

        self.assertEqual(response.status_code, 307)
        self.assertEqual(response.headers['location'], '/en/cms/login')

    def test_cms_login_is_public(self):
        response = self.get('/en/cms/login')

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['page'], 'cms-login')

    def test_invalid_token_treated_as_no_session(self):
        response = self.get('/en/cms', token='garbage')
        self.assertEqual(response.headers['location'], '/en/cms/login')

    def test_expired_token_treated_as_no_session(self):
        expired = SessionTokenIssuer(SECRET, max_age=timedelta(seconds=-10)).issue(make_user(Role.ADMIN))

        response = self.get('/en/cms', token=expired)

        self.assertEqual(response.headers['location'], '/en/cms/login')


class TestAuthorization(RouteGuardTestCase):

    def test_customer_is_sent_home(self):
        response = self.get('/pl/cms', token=self.token_for(Role.CUSTOMER))

        self.assertEqual(response.status_code, 307)
        self.assertEqual(response.headers['location'], '/pl')

    def test_admin_passes_through(self):
        response = self.get('/en/cms', token=self.token_for(Role.ADMIN))

        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body['page'], 'cms-dashboard')
        self.assertEqual(body['user']['name'], 'Test Admin')

    def test_admin_on_login_page(self):
        response = self.get('/en/cms/login', token=self.token_for(Role.ADMIN))
        self.assertEqual(response.status_code, 200)


class TestLocaleRouting(RouteGuardTestCase):

    def test_root_redirects_to_default_locale(self):
        response = self.get('/')

        self.assertEqual(response.status_code, 307)
        self.assertEqual(response.headers['location'], '/en')

    def test_supported_locale_home(self):
        response = self.get('/pl')

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {'locale': 'pl', 'page': 'home'})

    def test_unsupported_locale_page_is_not_found(self):
        self.assertEqual(self.get('/de').status_code, 404)

    def test_api_paths_bypass_guard(self):
        response = self.get('/api/auth/session')
        self.assertEqual(response.status_code, 401)


class TestPathClassification(unittest.TestCase):

    def test_is_cms_path(self):
        self.assertTrue(is_cms_path('/en/cms'))
        self.assertTrue(is_cms_path('/fr/cms/dashboard'))
        self.assertFalse(is_cms_path('/en/cmsx'))
        self.assertFalse(is_cms_path('/en/shop'))

    def test_is_cms_login_path(self):
        self.assertTrue(is_cms_login_path('/en/cms/login'))
        self.assertTrue(is_cms_login_path('/pl/cms/login/'))
        self.assertFalse(is_cms_login_path('/en/cms/dashboard'))
        self.assertFalse(is_cms_login_path('/en/login'))

    def test_is_excluded_path(self):
        self.assertTrue(is_excluded_path('/api/register'))
        self.assertTrue(is_excluded_path('/health'))
        self.assertTrue(is_excluded_path('/favicon.ico'))
        self.assertFalse(is_excluded_path('/apiary'))
        self.assertFalse(is_excluded_path('/en/cms'))


if __name__ == '__main__':
    unittest.main()
