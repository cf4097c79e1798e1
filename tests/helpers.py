"""Request helpers shared by the API tests."""

from fastapi.testclient import TestClient

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


def register(client: TestClient, name: str = "Asha", email: str = "a@x.com", phone: str = "555", password: str = "pw1"):
    response = client.post(
        "/api/register",
        json={"name": name, "email": email, "phone": phone, "password": password},
    )
    assert response.status_code == 200, response.text
    return response.json()


def auth_header(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def listing_payload(**overrides) -> dict:
    payload = {
        "title": "Healthy Sahiwal cow",
        "animalType": "Cow",
        "breed": "Sahiwal",
        "age": "3 years",
        "price": 45000,
        "location": "Pune",
        "description": "Gives 12 litres a day",
        "photos": ["/uploads/1700000000000-abc.jpg"],
        "sellerName": "Ravi",
        "sellerPhone": "999",
        "sellerEmail": "ravi@example.com",
    }
    payload.update(overrides)
    return payload
