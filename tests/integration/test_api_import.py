"""Integration tests for the admin CSV import endpoints."""

CSV = (
    "title,placeid,city,category,phone\n"
    "Corner Bakery,pl_1,Springfield,Bakeries,+1 555 123 4567\n"
    "Night Owl Cafe,pl_2,Shelbyville,Cafes,call us\n"
)


def _upload(content=CSV, filename="businesses.csv"):
    return {"file": (filename, content.encode("utf-8"), "text/csv")}


class TestImportEndpoints:
    """Test preview, validate and import over multipart uploads."""

    def test_preview(self, client, admin_headers):
        response = client.post("/api/admin/import/preview", files=_upload(), headers=admin_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["headers"] == ["title", "placeid", "city", "category", "phone"]
        assert data["total_rows"] == 2

    def test_validate_reports_warnings(self, client, admin_headers):
        data = client.post("/api/admin/import/validate", files=_upload(), headers=admin_headers).json()

        assert data["success"] is True
        assert [(w["row"], w["field"]) for w in data["warnings"]] == [(3, "phone")]

    def test_import_creates_public_listings(self, client, admin_headers):
        response = client.post("/api/admin/import", files=_upload(), headers=admin_headers)

        assert response.status_code == 200
        assert response.json()["created"] == 2
        listed = client.get("/api/businesses").json()
        assert listed["total"] == 2
        assert {b["submitted_by"] for b in listed["businesses"]} == {"csv-import"}

    def test_skip_duplicates_form_flag(self, client, admin_headers, make_business):
        make_business(placeid="pl_1")

        response = client.post(
            "/api/admin/import",
            files=_upload(),
            data={"skip_duplicates": "true"},
            headers=admin_headers,
        )

        assert response.json()["duplicates_skipped"] == 1
        assert response.json()["created"] == 1

    def test_rejects_non_csv(self, client, admin_headers):
        response = client.post(
            "/api/admin/import", files=_upload(filename="businesses.xlsx"), headers=admin_headers
        )

        assert response.status_code == 400

    def test_rejects_missing_columns(self, client, admin_headers):
        response = client.post(
            "/api/admin/import/preview", files=_upload("name,city\nShop,Town\n"), headers=admin_headers
        )

        assert response.status_code == 400
        assert "placeid" in response.json()["message"]

    def test_requires_admin(self, client, user_headers):
        assert client.post("/api/admin/import", files=_upload(), headers=user_headers).status_code == 403
