import datetime

import pytest
from django.contrib.auth import get_user_model
from django.test import RequestFactory, TestCase, override_settings

from ..auth import (authenticate_owner, create_access_token,
                    decode_access_token, register_owner)
from ..exceptions import Conflict, InvalidInput
from ..middleware import BearerOwnerMiddleware

User = get_user_model()


class OwnerAccountTests(TestCase):
    def test_register_hashes_password(self):
        user = register_owner("alice", "s3cret-pass")

        self.assertNotEqual(user.password, "s3cret-pass")
        self.assertTrue(user.check_password("s3cret-pass"))

    def test_register_duplicate_or_blank_is_rejected(self):
        register_owner("alice", "s3cret-pass")

        with self.assertRaises(Conflict):
            register_owner("alice", "another-pass")
        with self.assertRaises(InvalidInput):
            register_owner("", "pw")
        with self.assertRaises(InvalidInput):
            register_owner("bob", None)

    def test_authenticate_checks_password(self):
        register_owner("alice", "s3cret-pass")

        self.assertEqual(authenticate_owner("alice", "s3cret-pass").username, "alice")
        with self.assertRaises(InvalidInput):
            authenticate_owner("alice", "wrong")
        with self.assertRaises(InvalidInput):
            authenticate_owner("nobody", "s3cret-pass")


class BearerTokenTests(TestCase):
    def setUp(self):
        self.user = User.objects.create_user(username="alice", password="pw")
        self.middleware = BearerOwnerMiddleware(lambda request: None)

    def request_with(self, token):
        request = RequestFactory().get("/api/user", HTTP_AUTHORIZATION=f"Bearer {token}")
        self.middleware.process_request(request)
        return request

    def test_token_round_trip_identifies_owner(self):
        claims = decode_access_token(create_access_token(self.user))

        self.assertEqual(claims["sub"], str(self.user.pk))
        self.assertEqual(claims["userId"], "alice")
        # fixed seven day window
        self.assertEqual(claims["exp"] - claims["iat"], 7 * 24 * 3600)

    def test_expired_token_is_rejected(self):
        issued = datetime.datetime.now(datetime.timezone.utc) - datetime.timedelta(days=8)
        token = create_access_token(self.user, now=issued)

        self.assertIsNone(decode_access_token(token))
        self.assertIsNone(self.request_with(token).owner)

    def test_token_signed_with_other_secret_is_rejected(self):
        with override_settings(JWT_SECRET="some-other-secret"):
            token = create_access_token(self.user)
        self.assertIsNone(decode_access_token(token))

    def test_middleware_sets_owner(self):
        request = self.request_with(create_access_token(self.user))
        self.assertEqual(request.owner, self.user)

    def test_middleware_ignores_inactive_accounts(self):
        token = create_access_token(self.user)
        self.user.is_active = False
        self.user.save()

        self.assertIsNone(self.request_with(token).owner)


@pytest.mark.django_db
def test_request_without_header_has_no_owner():
    request = RequestFactory().get("/api/clients")
    BearerOwnerMiddleware(lambda r: None).process_request(request)
    assert request.owner is None
