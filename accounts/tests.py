# accounts/tests.py
from django.contrib.auth import get_user_model
from django.contrib.auth.models import AnonymousUser
from django.test import TestCase, RequestFactory

from .identity import Principal, resolve_principal

User = get_user_model()


class ResolvePrincipalTest(TestCase):
    def setUp(self):
        self.factory = RequestFactory()

    def request_as(self, user):
        request = self.factory.get('/api/jobs/', {'userId': 'spoofed'})
        request.user = user
        return request

    def test_anonymous_has_no_principal(self):
        self.assertIsNone(resolve_principal(self.request_as(AnonymousUser())))
        self.assertIsNone(resolve_principal(self.factory.get('/')))

    def test_principal_uses_username_and_full_name(self):
        user = User.objects.create_user(username='u1', password='pass', first_name='Dana', last_name='Scully')
        principal = resolve_principal(self.request_as(user))
        self.assertEqual(principal, Principal(id='u1', name='Dana Scully', is_staff=False))

    def test_display_name_falls_back_to_username(self):
        user = User.objects.create_user(username='u2', password='pass', is_staff=True)
        principal = resolve_principal(self.request_as(user))
        self.assertEqual(principal.name, 'u2')
        self.assertTrue(principal.is_staff)
