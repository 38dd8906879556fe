"""Integration tests for categories, cities and the CMS endpoints."""


class TestCategoriesAndCities:
    """Test taxonomy endpoints."""

    def test_public_categories_with_counts(self, client, make_category, make_business):
        bakeries = make_category("Bakeries")
        make_category("Cafes")
        make_business(category=bakeries)
        make_business(category=bakeries, status="pending")

        data = client.get("/api/categories").json()

        assert [(c["name"], c["business_count"]) for c in data] == [("Bakeries", 1), ("Cafes", 0)]

    def test_single_category_has_count(self, client, make_category, make_business):
        bakeries = make_category("Bakeries")
        make_business(category=bakeries)
        make_business(category=bakeries)
        make_business(category=bakeries, status="pending")

        data = client.get("/api/categories/bakeries").json()

        assert data["name"] == "Bakeries"
        assert data["business_count"] == 2

    def test_admin_create_and_conflict(self, client, admin_headers):
        created = client.post("/api/admin/categories", json={"name": "Florists"}, headers=admin_headers)
        assert created.status_code == 201
        assert created.json()["slug"] == "florists"

        duplicate = client.post("/api/admin/categories", json={"name": "Florists"}, headers=admin_headers)
        assert duplicate.status_code == 409

    def test_cannot_delete_category_in_use(self, client, admin_headers, make_category, make_business):
        category = make_category("Bakeries")
        make_business(category=category)

        assert client.delete(f"/api/admin/categories/{category.id}", headers=admin_headers).status_code == 409

    def test_city_rename_updates_businesses(self, client, admin_headers, make_business):
        business = make_business(city="Sprngfield")

        response = client.put(
            "/api/admin/cities/Sprngfield", json={"name": "Springfield"}, headers=admin_headers
        )

        assert response.status_code == 200
        assert response.json()["businesses_updated"] == 1
        assert client.get(f"/api/businesses/{business.placeid}").json()["city"] == "Springfield"
        assert [c["name"] for c in client.get("/api/cities").json()] == ["Springfield"]

    def test_empty_city_only_listed_for_admin(self, client, admin_headers):
        client.post("/api/admin/cities", json={"name": "Ogdenville"}, headers=admin_headers)

        assert client.get("/api/cities").json() == []
        admin_cities = client.get("/api/admin/cities", headers=admin_headers).json()
        assert admin_cities[0]["slug"] == "ogdenville"


class TestPages:
    """Test CMS pages."""

    def test_draft_hidden_until_published(self, client, admin_headers):
        created = client.post(
            "/api/admin/pages", json={"title": "About Us", "content": "<p>Hello</p>"}, headers=admin_headers
        )
        assert created.status_code == 201
        page = created.json()
        assert page["slug"] == "about-us"
        assert page["status"] == "draft"
        assert client.get("/api/pages/about-us").status_code == 404

        published = client.post(f"/api/admin/pages/{page['id']}/publish", headers=admin_headers).json()
        assert published["published_at"] is not None
        assert client.get("/api/pages/about-us").status_code == 200
        assert [p["slug"] for p in client.get("/api/pages").json()] == ["about-us"]

    def test_slug_conflict(self, client, admin_headers):
        client.post("/api/admin/pages", json={"title": "Terms"}, headers=admin_headers)

        response = client.post("/api/admin/pages", json={"title": "Terms"}, headers=admin_headers)

        assert response.status_code == 409


class TestMenuItems:
    """Test menu item administration."""

    def _create(self, client, headers, name, position="header"):
        return client.post(
            "/api/admin/menu-items",
            json={"name": name, "url": f"/{name.lower()}", "position": position},
            headers=headers,
        ).json()

    def test_order_and_move(self, client, admin_headers):
        home = self._create(client, admin_headers, "Home")
        about = self._create(client, admin_headers, "About")
        assert (home["order"], about["order"]) == (1, 2)

        moved = client.put(f"/api/admin/menu-items/{about['id']}/move", json={"direction": "up"}, headers=admin_headers)
        assert moved.json()["order"] == 1

        edge = client.put(f"/api/admin/menu-items/{about['id']}/move", json={"direction": "up"}, headers=admin_headers)
        assert edge.status_code == 400

    def test_public_menu_hides_inactive(self, client, admin_headers):
        home = self._create(client, admin_headers, "Home")
        self._create(client, admin_headers, "Blog")

        client.patch(f"/api/admin/menu-items/{home['id']}/toggle", headers=admin_headers)

        assert [m["name"] for m in client.get("/api/menu-items/header").json()] == ["Blog"]

    def test_bulk_action_partial_failure(self, client, admin_headers):
        home = self._create(client, admin_headers, "Home")
        blog = self._create(client, admin_headers, "Blog")

        response = client.post(
            "/api/admin/menu-items/bulk-action",
            json={"menu_item_ids": [home["id"], 9999], "action": "delete"},
            headers=admin_headers,
        )

        assert response.status_code == 207
        assert response.json()["failed"] == 1
        remaining = client.get("/api/admin/menu-items", headers=admin_headers).json()
        assert [(m["id"], m["order"]) for m in remaining] == [(blog["id"], 1)]


class TestSocialLinks:
    """Test social media link administration."""

    LINK = {
        "platform": "instagram",
        "url": "https://instagram.com/businesshub",
        "display_name": "Instagram",
        "icon_class": "fab fa-instagram",
    }

    def test_create_and_list(self, client, admin_headers):
        created = client.post("/api/admin/social-media", json=self.LINK, headers=admin_headers)

        assert created.status_code == 201
        assert [link["platform"] for link in client.get("/api/social-media").json()] == ["instagram"]

    def test_duplicate_platform(self, client, admin_headers):
        client.post("/api/admin/social-media", json=self.LINK, headers=admin_headers)

        assert client.post("/api/admin/social-media", json=self.LINK, headers=admin_headers).status_code == 409

    def _create_all(self, client, headers):
        links = []
        for platform in ("facebook", "instagram", "youtube"):
            links.append(client.post(
                "/api/admin/social-media",
                json={
                    "platform": platform,
                    "url": f"https://{platform}.com/businesshub",
                    "display_name": platform.title(),
                    "icon_class": f"fab fa-{platform}",
                },
                headers=headers,
            ).json())
        return links

    def test_move_and_reorder(self, client, admin_headers):
        facebook, instagram, youtube = self._create_all(client, admin_headers)

        moved = client.put(
            f"/api/admin/social-media/{youtube['id']}/move", json={"direction": "up"}, headers=admin_headers
        )
        assert moved.json()["sort_order"] == 1
        assert [link["platform"] for link in client.get("/api/social-media").json()] == [
            "facebook", "youtube", "instagram",
        ]

        reordered = client.post(
            "/api/admin/social-media/reorder",
            json={"ordered_ids": [instagram["id"], youtube["id"], facebook["id"]]},
            headers=admin_headers,
        )
        assert [(link["platform"], link["sort_order"]) for link in reordered.json()] == [
            ("instagram", 0), ("youtube", 1), ("facebook", 2),
        ]

    def test_bulk_update(self, client, admin_headers):
        facebook, instagram, _ = self._create_all(client, admin_headers)

        response = client.put(
            "/api/admin/social-media/bulk-update",
            json={"updates": [
                {"id": facebook["id"], "display_name": "Facebook Page"},
                {"id": instagram["id"], "url": "not-a-url"},
            ]},
            headers=admin_headers,
        )

        assert response.status_code == 207
        assert response.json()["errors"] == [{"id": instagram["id"], "error": "Invalid URL"}]
        names = {link["platform"]: link["display_name"] for link in client.get("/api/social-media").json()}
        assert names["facebook"] == "Facebook Page"
        assert names["instagram"] == "Instagram"


class TestSiteSettings:
    """Test the key/value site settings."""

    def test_upsert_and_public_map(self, client, admin_headers):
        saved = client.put(
            "/api/admin/site-settings/site_title",
            json={"value": "Springfield Directory", "category": "general"},
            headers=admin_headers,
        )
        assert saved.status_code == 200

        client.put(
            "/api/admin/site-settings",
            json={"settings": [
                {"key": "featured_businesses_limit", "value": 8, "category": "display"},
                {"key": "enable_user_registration", "value": False},
            ]},
            headers=admin_headers,
        )

        assert client.get("/api/site-settings").json() == {
            "site_title": "Springfield Directory",
            "featured_businesses_limit": 8,
            "enable_user_registration": False,
        }

    def test_bulk_put_patch_and_delete(self, client, admin_headers):
        saved = client.put(
            "/api/admin/site-settings",
            json={"settings": [
                {"key": "site_title", "value": "Directory", "category": "general"},
                {"key": "support_phone", "value": "555-0100", "category": "contact"},
            ]},
            headers=admin_headers,
        )
        assert saved.status_code == 200
        assert sorted(s["key"] for s in saved.json()) == ["site_title", "support_phone"]

        patched = client.patch(
            "/api/admin/site-settings/site_title", json={"value": "Springfield Directory"}, headers=admin_headers
        )
        assert patched.json()["value"] == "Springfield Directory"
        assert patched.json()["category"] == "general"

        deleted = client.delete("/api/admin/site-settings/support_phone", headers=admin_headers)
        assert deleted.status_code == 204
        assert client.get("/api/site-settings").json() == {"site_title": "Springfield Directory"}

    def test_patch_missing_key(self, client, admin_headers):
        response = client.patch("/api/admin/site-settings/nope", json={"value": 1}, headers=admin_headers)

        assert response.status_code == 404

    def test_missing_key(self, client, admin_headers):
        assert client.get("/api/admin/site-settings/nope", headers=admin_headers).status_code == 404

    def test_requires_admin(self, client, user_headers):
        response = client.put("/api/admin/site-settings/site_title", json={"value": "x"}, headers=user_headers)

        assert response.status_code == 403


class TestAdminUsers:
    """Test account administration."""

    def test_create_and_filter_by_role(self, client, admin_headers):
        created = client.post(
            "/api/admin/users",
            json={
                "email": "owner2@example.com",
                "password": "secret123",
                "first_name": "Olive",
                "last_name": "Owner",
                "role": "business_owner",
            },
            headers=admin_headers,
        )
        assert created.status_code == 201

        owners = client.get("/api/admin/users", params={"role": "business_owner"}, headers=admin_headers).json()
        assert [u["email"] for u in owners] == ["owner2@example.com"]

    def test_cannot_delete_last_admin(self, client, admin_headers, admin_user):
        response = client.delete(f"/api/admin/users/{admin_user.id}", headers=admin_headers)

        assert response.status_code == 400

    def test_mass_suspend_skips_self(self, client, admin_headers, admin_user, regular_user):
        response = client.patch(
            "/api/admin/users/mass-action",
            json={"user_ids": [admin_user.id, regular_user.id], "action": "suspend"},
            headers=admin_headers,
        )

        assert response.status_code == 207
        assert response.json()["success"] == 1

    def test_reset_password(self, client, admin_headers, regular_user):
        response = client.patch(
            f"/api/admin/users/{regular_user.id}/password",
            json={"new_password": "fresh-password"},
            headers=admin_headers,
        )
        assert response.json()["message"] == "Password reset successfully"

        login = client.post("/api/auth/login", json={"email": regular_user.email, "password": "fresh-password"})
        assert login.status_code == 200
