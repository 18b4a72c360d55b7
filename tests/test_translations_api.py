"""
Tests for the translation grid endpoints.
"""

import jwt
import pytest

from transunit import db
from transunit.models import TransUnit, Translation


class TestHealthEndpoints:
    """Verify the server boots and responds."""

    def test_root_health(self, client):
        resp = client.get('/health')
        assert resp.status_code == 200
        assert resp.get_json()['status'] == 'ok'


class TestListTranslations:
    """Tests for GET /api/translations"""

    def test_list_empty(self, client, db_session):
        resp = client.get('/api/translations')

        assert resp.status_code == 200
        data = resp.get_json()
        assert data['translations'] == []
        assert data['total'] == 0

    def test_list_with_data(self, client, dataset):
        resp = client.get('/api/translations?rows=2&page=1')

        assert resp.status_code == 200
        data = resp.get_json()
        assert [t['key'] for t in data['translations']] == ['hello', 'bye']
        assert data['total'] == 4
        assert data['rows'] == 2

    def test_search_flag_as_string(self, client, dataset):
        off = client.get('/api/translations?_search=false&domain=valid').get_json()
        on = client.get('/api/translations?_search=true&domain=valid').get_json()

        assert off['total'] == 4
        assert on['total'] == 1
        assert on['translations'][0]['key'] == 'required'

    def test_locale_content_filter(self, client, dataset):
        data = client.get('/api/translations?fr=revoir').get_json()

        assert [t['key'] for t in data['translations']] == ['bye']
        assert data['total'] == 1

    def test_invalid_sort_column(self, client, dataset):
        resp = client.get('/api/translations?sidx=password&sord=ASC')

        assert resp.status_code == 400

    def test_invalid_page(self, client, dataset):
        resp = client.get('/api/translations?page=0')

        assert resp.status_code == 400


class TestDomains:
    """Tests for GET /api/translations/domains"""

    def test_domains(self, client, dataset):
        resp = client.get('/api/translations/domains')

        assert resp.status_code == 200
        data = resp.get_json()
        assert data['domains'] == ['admin', 'messages', 'validators']
        assert data['counts'] == {'admin': 1, 'messages': 2, 'validators': 1}


class TestCreateTransUnit:
    """Tests for POST /api/translations"""

    def test_create(self, client, db_session):
        resp = client.post('/api/translations', json={
            'key': 'hello',
            'domain': 'messages',
            'translations': {'en': 'Hello', 'fr': '', 'de': 'Hallo'},
        })

        assert resp.status_code == 201
        data = resp.get_json()['trans_unit']
        assert data['key'] == 'hello'
        assert sorted(t['locale'] for t in data['translations']) == ['de', 'en']
        assert all(t['modified_manually'] for t in data['translations'])

    def test_create_missing_fields(self, client, db_session):
        resp = client.post('/api/translations', json={'key': 'hello'})

        assert resp.status_code == 400

    def test_create_invalid_translations(self, client, db_session):
        resp = client.post('/api/translations', json={
            'key': 'hello',
            'domain': 'messages',
            'translations': ['Hello'],
        })

        assert resp.status_code == 400

    def test_create_duplicate(self, client, dataset):
        resp = client.post('/api/translations', json={'key': 'hello', 'domain': 'messages'})

        assert resp.status_code == 409
        assert resp.get_json()['id'] == dataset['hello'].id


class TestUpdateTransUnit:
    """Tests for PUT /api/translations/<id>"""

    def test_update_flags_changed_translations(self, client, dataset):
        trans_unit_id = dataset['hello'].id

        resp = client.put(f'/api/translations/{trans_unit_id}', json={
            'translations': {'en': 'Hello', 'fr': 'Salut', 'de': 'Hallo'},
        })

        assert resp.status_code == 200
        translations = {t['locale']: t for t in resp.get_json()['trans_unit']['translations']}
        assert translations['en']['modified_manually'] is False
        assert translations['fr']['content'] == 'Salut'
        assert translations['fr']['modified_manually'] is True
        assert translations['de']['content'] == 'Hallo'

    def test_update_not_found(self, client, db_session):
        resp = client.put('/api/translations/99999', json={'translations': {'en': 'Hi'}})

        assert resp.status_code == 404


class TestDeleteEndpoints:
    """Tests for the DELETE endpoints."""

    def test_delete_trans_unit(self, client, dataset):
        trans_unit_id = dataset['hello'].id

        resp = client.delete(f'/api/translations/{trans_unit_id}')

        assert resp.status_code == 200
        assert db.session.get(TransUnit, trans_unit_id) is None
        assert Translation.query.filter_by(trans_unit_id=trans_unit_id).count() == 0

    def test_delete_trans_unit_not_found(self, client, db_session):
        resp = client.delete('/api/translations/99999')

        assert resp.status_code == 404

    def test_delete_translation(self, client, dataset):
        trans_unit_id = dataset['hello'].id

        resp = client.delete(f'/api/translations/{trans_unit_id}/fr')

        assert resp.status_code == 200
        db.session.expire_all()
        assert db.session.get(TransUnit, trans_unit_id).get_locales() == ['en']

    def test_delete_missing_translation(self, client, dataset):
        resp = client.delete(f"/api/translations/{dataset['required'].id}/fr")

        assert resp.status_code == 404


class TestAuthentication:
    """Write endpoints require a bearer token outside of testing mode."""

    @pytest.fixture
    def auth_enabled(self, app, monkeypatch):
        monkeypatch.setitem(app.config, 'TESTING', False)

    def test_missing_token(self, client, dataset, auth_enabled):
        resp = client.delete(f"/api/translations/{dataset['hello'].id}")

        assert resp.status_code == 401

    def test_invalid_token(self, client, dataset, auth_enabled):
        resp = client.delete(
            f"/api/translations/{dataset['hello'].id}",
            headers={'Authorization': 'Bearer not-a-token'}
        )

        assert resp.status_code == 401

    def test_valid_token(self, app, client, dataset, auth_enabled):
        token = jwt.encode({'user_id': 7}, app.config['JWT_SECRET_KEY'], algorithm='HS256')

        resp = client.delete(
            f"/api/translations/{dataset['hello'].id}",
            headers={'Authorization': f'Bearer {token}'}
        )

        assert resp.status_code == 200

    def test_reads_stay_public(self, client, dataset, auth_enabled):
        assert client.get('/api/translations').status_code == 200
