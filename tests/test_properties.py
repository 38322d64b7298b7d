from propvest.storage.seed import SAMPLE_PROPERTIES

NEW_LISTING = {
    "title": "Penthouse in Palm Jumeirah",
    "location": "Palm Jumeirah",
    "city": "Dubai",
    "bedrooms": 4,
    "price": "AED 9,500,000",
    "imageUrl": "https://example.com/palm.jpg",
    "type": "Capital Growth",
    "fundingPercentage": 10,
    "yearlyReturn": 7.5,
    "totalReturn": 37.5,
    "projectedYield": 4.0,
    "propertyId": "9001",
    "status": "Ready",
}


def test_properties_default_to_available(client):
    response = client.get("/api/properties")

    assert response.status_code == 200
    body = response.json()
    assert [p["id"] for p in body] == [1, 2, 3]
    assert all(p["filter"] == "Available" for p in body)
    assert body[0]["title"] == SAMPLE_PROPERTIES[0]["title"]
    assert body[0]["yearlyReturn"] == SAMPLE_PROPERTIES[0]["yearly_return"]


def test_properties_by_filter(client):
    assert [p["id"] for p in client.get("/api/properties?filter=Funded").json()] == [4, 5]
    assert [p["id"] for p in client.get("/api/properties?filter=Exited").json()] == [6]
    assert client.get("/api/properties?filter=Unknown").json() == []


def test_get_property(client):
    response = client.get("/api/properties/2")

    assert response.status_code == 200
    assert response.json()["propertyId"] == SAMPLE_PROPERTIES[1]["property_id"]


def test_get_missing_property(client):
    response = client.get("/api/properties/999")

    assert response.status_code == 404
    assert response.json() == {"message": "Property not found"}


def test_get_property_with_invalid_id(client):
    assert client.get("/api/properties/abc").status_code == 400


def test_create_property_requires_login(client):
    assert client.post("/api/properties", json=NEW_LISTING).status_code == 401


def test_create_property(user_client):
    response = user_client.post("/api/properties", json=NEW_LISTING)

    assert response.status_code == 201
    body = response.json()
    assert body["id"] == 7
    assert body["filter"] == "Available"
    assert body["adminId"] is None
    assert len(user_client.get("/api/properties").json()) == 4


def test_create_property_by_admin_records_admin(admin_client, admin):
    response = admin_client.post("/api/properties", json=NEW_LISTING)

    assert response.status_code == 201
    assert response.json()["adminId"] == admin.id


def test_create_property_validates_funding(user_client):
    response = user_client.post("/api/properties", json=dict(NEW_LISTING, fundingPercentage=140))

    assert response.status_code == 400
    assert response.json()["message"] == "Funding percentage must be between 0 and 100"


def test_property_media_listings(client, storage):
    storage.add_property_image({"property_id": 1, "image_url": "second.jpg", "display_order": 2})
    storage.add_property_image({"property_id": 1, "image_url": "first.jpg", "display_order": 1})
    storage.add_property_document({
        "property_id": 1,
        "title": "Title deed",
        "document_url": "https://example.com/deed.pdf",
    })

    images = client.get("/api/properties/1/images").json()
    documents = client.get("/api/properties/1/documents").json()

    assert [i["imageUrl"] for i in images] == ["first.jpg", "second.jpg"]
    assert [d["title"] for d in documents] == ["Title deed"]
    assert client.get("/api/properties/999/images").status_code == 404
