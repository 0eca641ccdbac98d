"""
Tests for the JSON entity routes
"""

import io


def _create_asset(client, number, name, **extra):
    body = {'asset_number': number, 'name': name}
    body.update(extra)
    return client.post('/api/assets', json=body)


def test_crud_cycle(client):
    response = _create_asset(client, 'A1', 'Pump')
    assert response.status_code == 201
    asset_id = response.get_json()['id']

    response = client.get(f'/api/assets/{asset_id}')
    assert response.status_code == 200
    assert response.get_json()['name'] == 'Pump'

    response = client.patch(f'/api/assets/{asset_id}', json={'manufacturer': 'Goulds'})
    assert response.status_code == 200
    assert response.get_json()['manufacturer'] == 'Goulds'
    assert response.get_json()['name'] == 'Pump'

    response = client.delete(f'/api/assets/{asset_id}')
    assert response.status_code == 204

    response = client.get(f'/api/assets/{asset_id}')
    assert response.status_code == 404
    assert response.get_json() == {'error': 'Not found'}


def test_list_search_and_sort(client):
    _create_asset(client, 'A1', 'Feed Pump')
    _create_asset(client, 'A2', 'Air Handler')
    _create_asset(client, 'A3', 'Condensate Pump')

    listed = client.get('/api/assets').get_json()
    assert [row['asset_number'] for row in listed] == ['A1', 'A2', 'A3']

    found = client.get('/api/assets?q=pump').get_json()
    assert [row['asset_number'] for row in found] == ['A1', 'A3']

    ordered = client.get('/api/assets?sort=name&direction=desc').get_json()
    assert [row['name'] for row in ordered] == ['Feed Pump', 'Condensate Pump', 'Air Handler']

    filtered = client.get('/api/assets?filter=handler').get_json()
    assert [row['asset_number'] for row in filtered] == ['A2']


def test_bad_sort_direction_is_400(client):
    response = client.get('/api/assets?sort=name&direction=sideways')
    assert response.status_code == 400
    assert 'direction' in response.get_json()['error']


def test_missing_required_field_is_400(client):
    response = client.post('/api/assets', json={'asset_number': 'A1'})
    assert response.status_code == 400
    assert response.get_json()['fields'] == ['name']


def test_non_object_body_is_400(client):
    response = client.post('/api/assets', json=['A1', 'Pump'])
    assert response.status_code == 400


def test_duplicate_is_409_with_store_message(client):
    _create_asset(client, 'A1', 'Pump')
    response = _create_asset(client, 'A1', 'Pump again')

    assert response.status_code == 409
    assert 'UNIQUE constraint failed' in response.get_json()['error']


def test_update_unknown_id_is_404(client):
    response = client.patch('/api/assets/no-such-id', json={'name': 'X'})
    assert response.status_code == 404


def test_unknown_kind_is_404(client):
    response = client.get('/api/widgets')
    assert response.status_code == 404
    assert response.get_json() == {'error': 'Not found'}


def test_kinds_are_addressed_by_slug(client):
    response = client.post('/api/service-requests', json={
        'service_requested': 'Replace seal',
        'status': 'Open',
        'priority': 'High',
        'service_type': 'Corrective',
    })
    assert response.status_code == 201
    assert response.get_json()['request_number'].startswith('SR-')

    assert client.get('/api/service-requests').status_code == 200


def test_multipart_import(client):
    data = {
        'file': (io.BytesIO(b"asset_number,name\nA1,Pump\n,MissingNumber\nA2,Valve"), 'assets.csv'),
    }
    response = client.post('/api/assets/import', data=data, content_type='multipart/form-data')

    assert response.status_code == 200
    assert response.get_json() == {'success': 2, 'errors': 1}
    assert len(client.get('/api/assets').get_json()) == 2


def test_raw_body_import(client):
    response = client.post(
        '/api/locations/import',
        data="name,description\nBoiler Room,Basement",
        content_type='text/csv'
    )
    assert response.get_json() == {'success': 1, 'errors': 0}


def test_import_without_header_is_400(client):
    response = client.post('/api/assets/import', data="\nA1,Pump\n", content_type='text/csv')
    assert response.status_code == 400
    assert 'header' in response.get_json()['error']


def test_import_sample(client):
    response = client.get('/api/assets/import/sample.csv')

    assert response.status_code == 200
    assert response.mimetype == 'text/csv'
    assert response.get_data(as_text=True) == 'asset_number,name\n'
