"""
Unit Tests for Donation (Paystack) Endpoints
"""
import pytest
from httpx import AsyncClient
from sqlalchemy import select, func

from alumni.models.donation import Donation


async def donation_count(db_session) -> int:
    result = await db_session.execute(select(func.count()).select_from(Donation))
    return result.scalar_one()


class TestCreatePayment:

    @pytest.mark.asyncio
    @pytest.mark.parametrize('body', [{'amount': 0}, {'amount': -50}, {'amount': 0.5}, {}])
    async def test_invalid_amount_never_reaches_gateway(self, client: AsyncClient, auth_headers, gateway, body):
        response = await client.post('/api/donations/create-payment', headers=auth_headers, json=body)

        assert response.status_code == 400
        assert response.json() == {'msg': 'Invalid amount'}
        assert gateway.initialize_calls == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize('raw_amount', ['NaN', 'Infinity', '1e400'])
    async def test_non_finite_amount_rejected(self, client: AsyncClient, auth_headers, gateway, raw_amount):
        response = await client.post(
            '/api/donations/create-payment',
            headers={**auth_headers, 'Content-Type': 'application/json'},
            content=f'{{"amount": {raw_amount}}}',
        )

        assert response.status_code == 400
        assert response.json() == {'msg': 'Invalid amount'}
        assert gateway.initialize_calls == []

    @pytest.mark.asyncio
    async def test_usd_amount_sent_in_cents(self, client: AsyncClient, test_user, auth_headers, gateway):
        response = await client.post(
            '/api/donations/create-payment',
            headers=auth_headers,
            json={'amount': 100, 'currency': 'usd'},
        )

        assert response.status_code == 200
        call = gateway.initialize_calls[0]
        assert call['currency'] == 'USD'
        assert call['amount'] == 10000
        assert call['email'] == test_user.email
        assert call['metadata'] == {'userId': test_user.id, 'currency': 'USD'}
        assert call['callback_url'] == 'http://localhost:5174/donations/success'
        assert call['reference'].startswith('kghs-don-')
        assert response.json() == {'authorization_url': f"https://checkout.paystack.test/{call['reference']}"}

    @pytest.mark.asyncio
    @pytest.mark.parametrize('currency', ['NGN', 'eur', None])
    async def test_other_currencies_become_ngn(self, client: AsyncClient, auth_headers, gateway, currency):
        body = {'amount': 2500.5}
        if currency is not None:
            body['currency'] = currency

        response = await client.post('/api/donations/create-payment', headers=auth_headers, json=body)

        assert response.status_code == 200
        assert gateway.initialize_calls[0]['currency'] == 'NGN'
        assert gateway.initialize_calls[0]['amount'] == 250050

    @pytest.mark.asyncio
    async def test_references_are_unique(self, client: AsyncClient, auth_headers, gateway):
        for _ in range(3):
            await client.post('/api/donations/create-payment', headers=auth_headers, json={'amount': 10})

        references = [c['reference'] for c in gateway.initialize_calls]
        assert len(set(references)) == 3

    @pytest.mark.asyncio
    async def test_gateway_failure(self, client: AsyncClient, auth_headers, gateway, db_session):
        gateway.fail_initialize = True

        response = await client.post('/api/donations/create-payment', headers=auth_headers, json={'amount': 10})

        assert response.status_code == 500
        assert response.json() == {'msg': 'Payment initialization failed'}
        assert await donation_count(db_session) == 0

    @pytest.mark.asyncio
    async def test_no_donation_recorded_at_initialize(self, client: AsyncClient, auth_headers, db_session):
        await client.post('/api/donations/create-payment', headers=auth_headers, json={'amount': 10})

        assert await donation_count(db_session) == 0

    @pytest.mark.asyncio
    async def test_requires_auth(self, client: AsyncClient, gateway):
        response = await client.post('/api/donations/create-payment', json={'amount': 10})

        assert response.status_code == 401
        assert gateway.initialize_calls == []


class TestVerifyPayment:

    @pytest.mark.asyncio
    async def test_success_records_donation(self, client: AsyncClient, db_session, test_user, auth_headers, gateway):
        gateway.verify_data = {'status': 'success', 'amount': 1234500, 'currency': 'NGN'}

        response = await client.get('/api/donations/verify/kghs-don-1-abc', headers=auth_headers)

        assert response.status_code == 200
        assert response.json() == {'success': True, 'message': 'Donation successful!'}

        donation = (await db_session.execute(select(Donation))).scalar_one()
        assert donation.amount == 12345.0
        assert donation.currency == 'NGN'
        assert donation.reference == 'kghs-don-1-abc'
        assert donation.donor_id == test_user.id

    @pytest.mark.asyncio
    async def test_repeated_verification_records_once(self, client: AsyncClient, db_session, auth_headers):
        first = await client.get('/api/donations/verify/kghs-don-2-xyz', headers=auth_headers)
        second = await client.get('/api/donations/verify/kghs-don-2-xyz', headers=auth_headers)

        assert first.json() == second.json() == {'success': True, 'message': 'Donation successful!'}
        assert await donation_count(db_session) == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize('status', ['failed', 'abandoned', 'ongoing'])
    async def test_unsuccessful_payment(self, client: AsyncClient, db_session, auth_headers, gateway, status):
        gateway.verify_data = {'status': status, 'amount': 500000, 'currency': 'NGN'}

        response = await client.get('/api/donations/verify/kghs-don-3-def', headers=auth_headers)

        assert response.status_code == 400
        assert response.json() == {'success': False, 'msg': 'Payment verification failed'}
        assert await donation_count(db_session) == 0

    @pytest.mark.asyncio
    async def test_gateway_failure(self, client: AsyncClient, db_session, auth_headers, gateway):
        gateway.fail_verify = True

        response = await client.get('/api/donations/verify/kghs-don-4-ghi', headers=auth_headers)

        assert response.status_code == 500
        assert response.json() == {'msg': 'Verification failed'}
        assert await donation_count(db_session) == 0

    @pytest.mark.asyncio
    async def test_usd_donation_keeps_currency(self, client: AsyncClient, db_session, auth_headers, gateway):
        gateway.verify_data = {'status': 'success', 'amount': 10000, 'currency': 'USD'}

        await client.get('/api/donations/verify/kghs-don-5-usd', headers=auth_headers)

        donation = (await db_session.execute(select(Donation))).scalar_one()
        assert donation.amount == 100.0
        assert donation.currency == 'USD'


class TestListDonations:

    @pytest.mark.asyncio
    async def test_admin_sees_donations_with_donor(self, client: AsyncClient, test_user, auth_headers, admin_auth_headers):
        await client.get('/api/donations/verify/kghs-don-6-aaa', headers=auth_headers)

        response = await client.get('/api/donations', headers=admin_auth_headers)

        assert response.status_code == 200
        [donation] = response.json()
        assert donation['amount'] == 5000.0
        assert donation['reference'] == 'kghs-don-6-aaa'
        assert donation['donor'] == {'id': test_user.id, 'name': test_user.name}
