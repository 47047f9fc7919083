"""Tests for the REST API."""

from weigh_in.services.importer import TEMPLATE_HEADERS

SETTINGS_URL = "/api/v1/settings"
WEIGHT_URL = "/api/v1/weight"


def _create(client, **payload):
    response = client.post(WEIGHT_URL, json=payload)
    assert response.status_code == 201
    return response.json()


class TestHealth:
    """Tests for the health endpoint."""

    def test_health(self, api_client):
        response = api_client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestSettingsApi:
    """Tests for /settings."""

    def test_first_get_returns_defaults(self, api_client):
        """With no stored document the defaults are returned verbatim."""
        data = api_client.get(SETTINGS_URL).json()

        assert data["tableMetrics"] == [
            "Date", "Weight", "BMI", "Body Fat %", "V-Fat", "S-Fat", "Water %", "BMR",
        ]
        assert data["chartMetrics"] == [
            "Weight", "BMI", "Body Fat %", "V-Fat", "S-Fat", "Water %", "BMR",
        ]
        assert data["defaultVisibleMetrics"] == ["Weight"]
        assert data["goalWeight"] is None
        assert data["darkMode"] is False
        assert data["userId"] == "default"

    def test_partial_update_keeps_other_fields(self, api_client):
        api_client.put(SETTINGS_URL, json={"goalWeight": 175, "darkMode": True})

        data = api_client.put(SETTINGS_URL, json={"tableMetrics": ["BMI", "Weight"]}).json()

        assert data["tableMetrics"] == ["Date", "BMI", "Weight"]
        assert data["goalWeight"] == 175
        assert data["darkMode"] is True
        assert api_client.get(SETTINGS_URL).json() == data

    def test_null_goal_weight_clears(self, api_client):
        api_client.put(SETTINGS_URL, json={"goalWeight": 175})

        data = api_client.put(SETTINGS_URL, json={"goalWeight": None}).json()

        assert data["goalWeight"] is None

    def test_malformed_values_are_ignored(self, api_client):
        before = api_client.get(SETTINGS_URL).json()

        data = api_client.put(
            SETTINGS_URL,
            json={"tableMetrics": "Weight", "chartMetrics": {"a": 1}, "goalWeight": -3, "darkMode": "on"},
        ).json()

        assert data["tableMetrics"] == before["tableMetrics"]
        assert data["chartMetrics"] == before["chartMetrics"]
        assert data["goalWeight"] is None
        assert data["darkMode"] is False

    def test_empty_body(self, api_client):
        assert api_client.put(SETTINGS_URL).status_code == 200

    def test_reset_keeps_dark_mode(self, api_client):
        api_client.put(
            SETTINGS_URL,
            json={"chartMetrics": ["HR"], "goalWeight": 160, "darkMode": True},
        )

        data = api_client.post(f"{SETTINGS_URL}/reset").json()

        assert data["chartMetrics"][0] == "Weight"
        assert len(data["chartMetrics"]) == 7
        assert data["goalWeight"] is None
        assert data["darkMode"] is True


class TestWeightCrud:
    """Tests for weight entry CRUD."""

    def test_create_and_read(self, api_client):
        created = _create(api_client, Date="03-01-24", Weight=182.4, BMI=25.1)

        assert created["Date"] == "03-01-24"
        assert created["Weight"] == 182.4
        assert created["HR"] == 0
        assert len(created["id"]) == 24

        fetched = api_client.get(f"{WEIGHT_URL}/{created['id']}").json()
        assert fetched == created

    def test_create_accepts_slashed_date(self, api_client):
        created = _create(api_client, Date="3/1/2024", Weight=182.4)
        assert created["Date"] == "03-01-24"

    def test_create_without_date_uses_today(self, api_client):
        created = _create(api_client, Weight=180)
        assert created["Date"]

    def test_create_validation_errors(self, api_client):
        response = api_client.post(WEIGHT_URL, json={"Date": "13-45-24", "Weight": "heavy"})

        assert response.status_code == 400
        assert response.json()["errors"] == [
            "Invalid date format. Use MM-DD-YY or MM/DD/YYYY",
            "Weight must be a valid number",
        ]

    def test_list_is_oldest_first(self, api_client):
        _create(api_client, Date="03-01-24", Weight=182)
        _create(api_client, Date="12-31-23", Weight=185)

        dates = [r["Date"] for r in api_client.get(WEIGHT_URL).json()]

        assert dates == ["12-31-23", "03-01-24"]

    def test_update_partial(self, api_client):
        created = _create(api_client, Date="03-01-24", Weight=182.4, BMI=25.1)

        response = api_client.put(f"{WEIGHT_URL}/{created['id']}", json={"Weight": 181.0})

        assert response.status_code == 200
        assert response.json()["Weight"] == 181.0
        assert response.json()["BMI"] == 25.1

    def test_update_validation(self, api_client):
        created = _create(api_client, Date="03-01-24", Weight=182.4)
        response = api_client.put(f"{WEIGHT_URL}/{created['id']}", json={"BMI": None})
        assert response.status_code == 400

    def test_delete(self, api_client):
        created = _create(api_client, Date="03-01-24", Weight=182.4)

        response = api_client.delete(f"{WEIGHT_URL}/{created['id']}")

        assert response.status_code == 200
        assert api_client.get(f"{WEIGHT_URL}/{created['id']}").status_code == 404

    def test_invalid_id_format(self, api_client):
        for method in ("get", "delete"):
            response = getattr(api_client, method)(f"{WEIGHT_URL}/placeholder-1")
            assert response.status_code == 400
            assert response.json() == {"error": "Invalid ID format"}
        response = api_client.put(f"{WEIGHT_URL}/placeholder-1", json={"Weight": 1})
        assert response.status_code == 400

    def test_missing_entry(self, api_client):
        missing = f"{42:024x}"

        assert api_client.get(f"{WEIGHT_URL}/{missing}").status_code == 404
        assert api_client.put(f"{WEIGHT_URL}/{missing}", json={"Weight": 1}).status_code == 404
        assert api_client.delete(f"{WEIGHT_URL}/{missing}").status_code == 404

    def test_clear(self, api_client):
        _create(api_client, Date="03-01-24", Weight=182)
        _create(api_client, Date="03-02-24", Weight=181)

        response = api_client.delete(WEIGHT_URL)

        assert response.json()["deletedCount"] == 2
        assert api_client.get(WEIGHT_URL).json() == []


class TestWeightQueries:
    """Tests for stats, ids and range queries."""

    def test_stats_empty(self, api_client):
        assert api_client.get(f"{WEIGHT_URL}/stats").json() == {
            "count": 0,
            "message": "No data available",
        }

    def test_stats(self, api_client):
        _create(api_client, Date="01-01-24", Weight=190.0)
        _create(api_client, Date="02-01-24", Weight=187.5)
        _create(api_client, Date="03-01-24", Weight=185.2)

        data = api_client.get(f"{WEIGHT_URL}/stats").json()

        assert data["count"] == 3
        assert data["oldest"]["Date"] == "01-01-24"
        assert data["latest"]["Date"] == "03-01-24"
        assert data["weightChange"] == -4.8

    def test_ids_newest_first(self, api_client):
        first = _create(api_client, Date="01-01-24", Weight=190.0)
        second = _create(api_client, Date="02-01-24", Weight=187.5)

        data = api_client.get(f"{WEIGHT_URL}/ids").json()

        assert data == [
            {"id": second["id"], "Date": "02-01-24"},
            {"id": first["id"], "Date": "01-01-24"},
        ]

    def test_range(self, api_client):
        for day in ("01-01-24", "01-15-24", "02-01-24"):
            _create(api_client, Date=day, Weight=180)

        response = api_client.get(
            f"{WEIGHT_URL}/range", params={"startDate": "01-10-24", "endDate": "02-01-24"}
        )

        assert [r["Date"] for r in response.json()] == ["01-15-24", "02-01-24"]

    def test_range_requires_both_dates(self, api_client):
        response = api_client.get(f"{WEIGHT_URL}/range", params={"startDate": "01-10-24"})
        assert response.status_code == 400
        assert response.json()["error"] == "Start date and end date are required"

    def test_range_rejects_bad_dates(self, api_client):
        response = api_client.get(
            f"{WEIGHT_URL}/range", params={"startDate": "soon", "endDate": "later"}
        )
        assert response.status_code == 400


class TestUpload:
    """Tests for CSV upload."""

    def _upload(self, client, name, content, content_type="text/csv"):
        return client.post(f"{WEIGHT_URL}/upload", files={"file": (name, content, content_type)})

    def test_raw_export(self, api_client, raw_scale_csv):
        response = self._upload(api_client, "scale.csv", raw_scale_csv.encode())

        data = response.json()
        assert response.status_code == 200
        assert data["message"] == "Data processed successfully"
        assert data["count"] == 2
        assert [r["Date"] for r in data["preview"]] == ["03-01-24", "03-02-24"]

    def test_processed_upload_overwrites_same_day(self, api_client, processed_csv):
        _create(api_client, Date="01-15-24", Weight=999)

        self._upload(api_client, "export.csv", processed_csv.encode())
        entries = api_client.get(WEIGHT_URL).json()

        assert len(entries) == 2
        assert entries[0]["Weight"] == 185.0

    def test_byte_order_mark_is_stripped(self, api_client, processed_csv):
        response = self._upload(api_client, "export.csv", b"\xef\xbb\xbf" + processed_csv.encode())
        assert response.json()["count"] == 2

    def test_csv_extension_with_generic_type_is_rejected(self, api_client, processed_csv):
        response = self._upload(
            api_client, "export.csv", processed_csv.encode(), "application/octet-stream"
        )

        assert response.status_code == 415
        assert response.json()["error"] == "Only CSV files are allowed"
        assert api_client.get(WEIGHT_URL).json() == []

    def test_csv_type_with_charset(self, api_client, processed_csv):
        response = self._upload(
            api_client, "export", processed_csv.encode(), "text/csv; charset=utf-8"
        )
        assert response.status_code == 200

    def test_no_file(self, api_client):
        response = api_client.post(f"{WEIGHT_URL}/upload")
        assert response.status_code == 400
        assert response.json()["error"] == "No file uploaded"

    def test_rejects_non_csv(self, api_client):
        response = self._upload(api_client, "notes.txt", b"hello", "text/plain")
        assert response.status_code == 415

    def test_rejects_large_files(self, api_client):
        response = self._upload(api_client, "big.csv", b"a" * (5 * 1024 * 1024 + 1))
        assert response.status_code == 413

    def test_unknown_layout(self, api_client):
        response = self._upload(api_client, "other.csv", b"foo,bar\n1,2\n")

        assert response.status_code == 400
        assert response.json() == {
            "error": "Error processing data",
            "message": "Unknown CSV format.",
        }


class TestExport:
    """Tests for CSV export and template download."""

    def test_export_without_data(self, api_client):
        response = api_client.get(f"{WEIGHT_URL}/export")
        assert response.status_code == 404
        assert response.json()["error"] == "No data available to export"

    def test_export(self, api_client):
        _create(api_client, Date="03-01-24", Weight=182.4)

        response = api_client.get(f"{WEIGHT_URL}/export")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        assert "weight-data-export.csv" in response.headers["content-disposition"]
        lines = response.text.splitlines()
        assert lines[0] == ",".join(TEMPLATE_HEADERS)
        assert lines[1].startswith("03-01-24,182.4,")

    def test_template(self, api_client):
        response = api_client.get(f"{WEIGHT_URL}/template")

        assert response.status_code == 200
        assert "weight-data-template.csv" in response.headers["content-disposition"]
        assert response.text.strip() == ",".join(TEMPLATE_HEADERS)
