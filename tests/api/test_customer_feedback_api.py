"""
API Tests - Customer Feedback Reports
"""
from fastapi.testclient import TestClient
from pymongo.errors import ServerSelectionTimeoutError

from apre.database import pipelines
from conftest import make_cursor

BASE = "/api/reports/customer-feedback"


class TestChannelRatingByMonth:
    """Tests for GET /channel-rating-by-month"""

    def test_returns_ratings_for_month(self, client, feedback_collection):
        """Test ratings grouped by channel for a month"""
        feedback_collection.aggregate.return_value = make_cursor([
            {"channels": ["Email", "Phone"], "ratingAvg": [4.5, 3.8]},
        ])

        response = client.get(f"{BASE}/channel-rating-by-month?month=1")

        assert response.status_code == 200
        assert response.json() == [
            {"channels": ["Email", "Phone"], "ratingAvg": [4.5, 3.8]},
        ]

    def test_runs_pipeline_for_requested_month(self, client, feedback_collection):
        """Test the month is passed into the pipeline as a number"""
        client.get(f"{BASE}/channel-rating-by-month?month=7")

        feedback_collection.aggregate.assert_awaited_once_with(
            pipelines.channel_rating_by_month(7)
        )

    def test_nested_rating_lists_pass_through(self, client, feedback_collection):
        """Test per-channel rating lists are returned as produced"""
        feedback_collection.aggregate.return_value = make_cursor([
            {"channels": ["Online", "Retail"], "ratingAvg": [[4.0], [3.5]]},
        ])

        response = client.get(f"{BASE}/channel-rating-by-month?month=3")

        body = response.json()
        assert response.status_code == 200
        assert body[0]["ratingAvg"] == [[4.0], [3.5]]
        assert len(body[0]["channels"]) == len(body[0]["ratingAvg"])

    def test_no_feedback_returns_empty_list(self, client):
        """Test a month without feedback is not an error"""
        response = client.get(f"{BASE}/channel-rating-by-month?month=12")

        assert response.status_code == 200
        assert response.json() == []

    def test_missing_month_returns_400(self, client, feedback_collection):
        """Test month is required"""
        response = client.get(f"{BASE}/channel-rating-by-month")

        assert response.status_code == 400
        assert response.json() == {
            "message": "month and channel are required",
            "status": 400,
            "type": "error",
        }
        feedback_collection.aggregate.assert_not_called()

    def test_empty_month_returns_400(self, client):
        """Test an empty month counts as missing"""
        response = client.get(f"{BASE}/channel-rating-by-month?month=")

        assert response.status_code == 400
        assert response.json()["message"] == "month and channel are required"

    def test_out_of_range_month_returns_400(self, client, feedback_collection):
        """Test months outside 1-12 are rejected before querying"""
        for month in ("0", "13", "-1"):
            response = client.get(f"{BASE}/channel-rating-by-month?month={month}")

            assert response.status_code == 400
            assert response.json()["type"] == "error"

        feedback_collection.aggregate.assert_not_called()

    def test_non_numeric_month_returns_400(self, client):
        """Test a non-numeric month is rejected"""
        response = client.get(f"{BASE}/channel-rating-by-month?month=january")

        assert response.status_code == 400
        assert response.json() == {
            "message": "month must be an integer between 1 and 12",
            "status": 400,
            "type": "error",
        }

    def test_null_channel_in_month_report(self, client, feedback_collection):
        """Test a null channel and null average survive validation"""
        feedback_collection.aggregate.return_value = make_cursor([
            {"channels": [None, "Phone"], "ratingAvg": [[None], [3.8]]},
        ])

        response = client.get(f"{BASE}/channel-rating-by-month?month=2")

        assert response.status_code == 200
        assert response.json() == [{"channels": [None, "Phone"], "ratingAvg": [[None], [3.8]]}]

    def test_invalid_endpoint_returns_404(self, client):
        """Test unknown report paths use the error envelope"""
        response = client.get(f"{BASE}/invalid-endpoint")

        assert response.status_code == 404
        assert response.json() == {"message": "Not Found", "status": 404, "type": "error"}

    def test_store_failure_returns_500(self, client, feedback_collection):
        """Test store errors reach the generic error responder"""
        feedback_collection.aggregate.side_effect = ServerSelectionTimeoutError("no servers")

        response = client.get(f"{BASE}/channel-rating-by-month?month=1")

        assert response.status_code == 500
        assert response.json() == {
            "message": "Internal Server Error",
            "status": 500,
            "type": "error",
        }


class TestFeedbackBySalesperson:
    """Tests for GET /feedback-by-salesperson/{salesperson}"""

    def test_returns_feedback_per_channel(self, client, feedback_collection):
        """Test performance data for a known salesperson"""
        feedback_collection.aggregate.return_value = make_cursor([
            {"channelName": "Online", "totalSales": 1, "averageRating": 3},
            {"channelName": "Retail", "totalSales": 2, "averageRating": 4},
        ])

        response = client.get(f"{BASE}/feedback-by-salesperson/Roger Rabbit")

        assert response.status_code == 200
        assert response.json() == [
            {"channelName": "Online", "totalSales": 1, "averageRating": 3},
            {"channelName": "Retail", "totalSales": 2, "averageRating": 4},
        ]
        feedback_collection.aggregate.assert_awaited_once_with(
            pipelines.feedback_by_salesperson("Roger Rabbit")
        )

    def test_unknown_salesperson_returns_empty_list(self, client):
        """Test an unmatched salesperson is not an error"""
        response = client.get(f"{BASE}/feedback-by-salesperson/Invalid Name")

        assert response.status_code == 200
        assert response.json() == []

    def test_one_entry_per_channel(self, client, feedback_collection):
        """Test N channels yield N rows within the rating range"""
        rows = [
            {"channelName": channel, "totalSales": n, "averageRating": 2.5 + n / 2}
            for n, channel in enumerate(["Email", "Online", "Phone", "Retail"], start=1)
        ]
        feedback_collection.aggregate.return_value = make_cursor(rows)

        body = client.get(f"{BASE}/feedback-by-salesperson/Jane Smith").json()

        assert len(body) == 4
        assert {row["channelName"] for row in body} == {"Email", "Online", "Phone", "Retail"}
        for row in body:
            assert row["totalSales"] >= 0
            assert 0 <= row["averageRating"] <= 5

    def test_name_with_encoded_slash(self, client, feedback_collection):
        """Test a salesperson name containing "/" reaches the pipeline intact"""
        response = client.get(f"{BASE}/feedback-by-salesperson/Smith%2FJones")

        assert response.status_code == 200
        assert response.json() == []
        feedback_collection.aggregate.assert_awaited_once_with(
            pipelines.feedback_by_salesperson("Smith/Jones")
        )

    def test_empty_name_returns_404(self, client, feedback_collection):
        """Test a trailing slash without a name is not a report"""
        response = client.get(f"{BASE}/feedback-by-salesperson/")

        assert response.status_code == 404
        assert response.json() == {"message": "Not Found", "status": 404, "type": "error"}
        feedback_collection.aggregate.assert_not_called()

    def test_null_channel_and_average_pass_through(self, client, feedback_collection):
        """Test null group keys and null averages are returned as produced"""
        rows = [
            {"channelName": None, "totalSales": 3, "averageRating": 4.5},
            {"channelName": "Online", "totalSales": 2, "averageRating": None},
        ]
        feedback_collection.aggregate.return_value = make_cursor(rows)

        response = client.get(f"{BASE}/feedback-by-salesperson/Roger Rabbit")

        assert response.status_code == 200
        assert response.json() == rows

    def test_misspelled_endpoint_returns_404(self, client):
        """Test a misspelled report path"""
        response = client.get(f"{BASE}/feedback-by-salespersony")

        assert response.status_code == 404
        assert response.json() == {"message": "Not Found", "status": 404, "type": "error"}

    def test_malformed_row_is_rejected(self, client, feedback_collection):
        """Test rows that fail the report model surface as a server error"""
        feedback_collection.aggregate.return_value = make_cursor([
            {"channelName": "Online", "totalSales": -1, "averageRating": 3},
        ])

        response = client.get(f"{BASE}/feedback-by-salesperson/Roger Rabbit")

        assert response.status_code == 500
        assert response.json()["type"] == "error"


class TestFeedbackSalespeople:
    """Tests for GET /salespeople"""

    def test_returns_distinct_salespeople(self, client, feedback_collection):
        """Test distinct salespeople from the feedback collection"""
        feedback_collection.distinct.return_value = [
            "James Brown", "John Doe", "Emily Davis", "Jane Smith",
        ]

        response = client.get(f"{BASE}/salespeople")

        assert response.status_code == 200
        assert response.json() == ["James Brown", "John Doe", "Emily Davis", "Jane Smith"]
        feedback_collection.distinct.assert_awaited_once_with("salesperson")

    def test_no_salespeople_returns_empty_list(self, client):
        """Test an empty collection"""
        response = client.get(f"{BASE}/salespeople")

        assert response.status_code == 200
        assert response.json() == []

    def test_misspelled_endpoint_returns_404(self, client):
        """Test a misspelled report path"""
        response = client.get(f"{BASE}/salespeopled")

        assert response.status_code == 404
        assert response.json() == {"message": "Not Found", "status": 404, "type": "error"}

    def test_wrong_method_uses_error_envelope(self, client):
        """Test non-GET methods get the error envelope"""
        response = client.post(f"{BASE}/salespeople")

        assert response.status_code == 405
        assert response.json() == {
            "message": "Method Not Allowed",
            "status": 405,
            "type": "error",
        }

    def test_unexpected_error_returns_500_envelope(self, app, feedback_collection):
        """Test non-driver exceptions still get the generic error envelope"""
        feedback_collection.distinct.side_effect = KeyError("salesperson")

        with TestClient(app, raise_server_exceptions=False) as client:
            response = client.get(f"{BASE}/salespeople")

        assert response.status_code == 500
        assert response.json() == {
            "message": "Internal Server Error",
            "status": 500,
            "type": "error",
        }
