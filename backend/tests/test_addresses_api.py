"""Address endpoints under /api/contacts/{contact_id}/addresses."""

import pytest


ADDRESS = {
    "street": "Jalan Belum Ada",
    "city": "Jakarta",
    "province": "DKI Jakarta",
    "country": "Indonesia",
    "postal_code": "10110",
}


@pytest.fixture
def contact(store):
    return store.add_contact("test", first_name="Eko")


@pytest.fixture
def address(store, contact):
    return store.add_address(contact["id"], **ADDRESS)


@pytest.fixture
def other_user(store):
    store.add_user("budi", "Budi", "budi", token="budi-token")
    return {"Authorization": "budi-token"}


def _url(contact_id: int, address_id: int | None = None) -> str:
    url = f"/api/contacts/{contact_id}/addresses"
    return url if address_id is None else f"{url}/{address_id}"


def test_create_address(client, auth, contact):
    res = client.post(_url(contact["id"]), json=ADDRESS, headers=auth)
    assert res.status_code == 200
    data = res.json()["data"]
    assert data["id"]
    assert {k: data[k] for k in ADDRESS} == ADDRESS


def test_create_address_with_required_fields_only(client, auth, contact):
    res = client.post(
        _url(contact["id"]), json={"country": "Indonesia", "postal_code": "10110"}, headers=auth
    )
    assert res.status_code == 200
    data = res.json()["data"]
    assert data["street"] is None
    assert data["city"] is None
    assert data["province"] is None


def test_create_address_rejects_invalid_request(client, auth, contact):
    res = client.post(_url(contact["id"]), json={"country": "", "postal_code": ""}, headers=auth)
    assert res.status_code == 400
    errors = res.json()["errors"]
    assert "country" in errors
    assert "postal_code" in errors


def test_create_address_rejects_long_postal_code(client, auth, contact):
    res = client.post(
        _url(contact["id"]), json={**ADDRESS, "postal_code": "1" * 11}, headers=auth
    )
    assert res.status_code == 400


def test_create_address_for_missing_contact(client, auth, contact):
    res = client.post(_url(contact["id"] + 1), json=ADDRESS, headers=auth)
    assert res.status_code == 404
    assert res.json() == {"errors": "Contact is not found"}


def test_get_address(client, auth, contact, address):
    res = client.get(_url(contact["id"], address["id"]), headers=auth)
    assert res.status_code == 200
    assert res.json()["data"]["id"] == address["id"]
    assert res.json()["data"]["city"] == "Jakarta"


def test_get_missing_address(client, auth, contact, address):
    res = client.get(_url(contact["id"], address["id"] + 1), headers=auth)
    assert res.status_code == 404
    assert res.json() == {"errors": "Address is not found"}


def test_get_address_through_another_contact(client, auth, store, address):
    other_contact = store.add_contact("test", first_name="Budi")
    res = client.get(_url(other_contact["id"], address["id"]), headers=auth)
    assert res.status_code == 404


def test_get_address_of_other_user_is_not_found(client, contact, address, other_user):
    res = client.get(_url(contact["id"], address["id"]), headers=other_user)
    assert res.status_code == 404
    assert res.json() == {"errors": "Contact is not found"}


def test_update_address(client, auth, contact, address):
    res = client.put(
        _url(contact["id"], address["id"]),
        json={"city": "Bandung", "country": "Indonesia", "postal_code": "40111"},
        headers=auth,
    )
    assert res.status_code == 200
    data = res.json()["data"]
    assert data["city"] == "Bandung"
    assert data["postal_code"] == "40111"
    assert data["street"] is None


def test_update_address_rejects_invalid_request(client, auth, contact, address):
    res = client.put(_url(contact["id"], address["id"]), json={"country": ""}, headers=auth)
    assert res.status_code == 400


def test_update_missing_address(client, auth, contact, address):
    res = client.put(_url(contact["id"], address["id"] + 1), json=ADDRESS, headers=auth)
    assert res.status_code == 404


def test_delete_address(client, auth, contact, address, store):
    res = client.delete(_url(contact["id"], address["id"]), headers=auth)
    assert res.status_code == 200
    assert res.json() == {"data": True}
    assert address["id"] not in store.addresses


def test_delete_missing_address(client, auth, contact, address):
    res = client.delete(_url(contact["id"], address["id"] + 1), headers=auth)
    assert res.status_code == 404


def test_list_addresses(client, auth, store, contact):
    for city in ("Jakarta", "Bandung"):
        store.add_address(contact["id"], **{**ADDRESS, "city": city})

    res = client.get(_url(contact["id"]), headers=auth)
    assert res.status_code == 200
    assert [a["city"] for a in res.json()["data"]] == ["Jakarta", "Bandung"]


def test_list_addresses_of_other_user_is_not_found(client, contact, other_user):
    res = client.get(_url(contact["id"]), headers=other_user)
    assert res.status_code == 404


def test_deleting_contact_removes_its_addresses(client, auth, contact, address, store):
    client.delete(f"/api/contacts/{contact['id']}", headers=auth)
    assert address["id"] not in store.addresses


def test_addresses_require_token(client, contact):
    res = client.get(_url(contact["id"]))
    assert res.status_code == 401
