"""Tests for StripeConnectAdapter with the Stripe SDK mocked."""

import threading
import unittest
from unittest.mock import patch

import stripe

from adapter.external.stripe_connect import StripeConnectAdapter
from port.payment import PaymentError


class TestStripeConnectAdapter(unittest.IsolatedAsyncioTestCase):

    def setUp(self):
        self.adapter = StripeConnectAdapter(api_key='sk_test_123')

    @patch('adapter.external.stripe_connect.stripe.OAuth.token')
    async def test_connect_returns_stripe_user_id(self, mock_token):
        mock_token.return_value = {'stripe_user_id': 'acct_1', 'scope': 'read_write'}

        self.assertEqual(await self.adapter.connect('stripe-code'), 'acct_1')
        mock_token.assert_called_once_with(
            api_key='sk_test_123',
            grant_type='authorization_code',
            code='stripe-code',
        )

    @patch('adapter.external.stripe_connect.stripe.OAuth.token')
    async def test_sdk_call_runs_off_the_event_loop_thread(self, mock_token):
        loop_thread = threading.get_ident()
        seen_threads = []

        def token(**kwargs):
            seen_threads.append(threading.get_ident())
            return {'stripe_user_id': 'acct_1'}

        mock_token.side_effect = token

        await self.adapter.connect('stripe-code')

        self.assertEqual(len(seen_threads), 1)
        self.assertNotEqual(seen_threads[0], loop_thread)

    @patch('adapter.external.stripe_connect.stripe.OAuth.token')
    async def test_connect_empty_response(self, mock_token):
        mock_token.return_value = None

        self.assertIsNone(await self.adapter.connect('stripe-code'))

    @patch('adapter.external.stripe_connect.stripe.OAuth.token')
    async def test_connect_response_without_account(self, mock_token):
        mock_token.return_value = {'scope': 'read_write'}

        self.assertIsNone(await self.adapter.connect('stripe-code'))

    @patch('adapter.external.stripe_connect.stripe.OAuth.token')
    async def test_stripe_error_becomes_payment_error(self, mock_token):
        mock_token.side_effect = stripe.StripeError("Authorization code expired")

        with self.assertRaises(PaymentError) as context:
            await self.adapter.connect('stripe-code')

        self.assertIn("Authorization code expired", str(context.exception))


if __name__ == '__main__':
    unittest.main()
