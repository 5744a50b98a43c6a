"""
Unit tests for the OMDb catalog client.
"""

import json
import threading
import unittest
from unittest.mock import MagicMock, patch

import requests

from movierec.core.deadline import Deadline
from movierec.core.exceptions import DeadlineExceededException, ExternalServiceException, NotFoundException
from movierec.core.interfaces import OMDbConfig
from movierec.core.omdb_client import OMDbClient

from fakes import detail_payload


def http_response(body, status_code=200):
    response = MagicMock()
    response.status_code = status_code
    response.text = body if isinstance(body, str) else json.dumps(body)
    return response


class TestOMDbClient(unittest.TestCase):

    def setUp(self):
        self.client = OMDbClient(OMDbConfig(api_key="secret", base_url="http://omdb.test", timeout=10))

    def test_search_success(self):
        body = {
            "Search": [
                {"Title": "The Shawshank Redemption", "Year": "1994", "imdbID": "tt0111161",
                 "Type": "movie", "Poster": "N/A"},
            ],
            "totalResults": "1",
            "Response": "True",
        }
        with patch.object(self.client.session, "get", return_value=http_response(body)) as get:
            resp = self.client.search_by_title("Shawshank", 2)

        self.assertEqual([hit.imdb_id for hit in resp.payload.results], ["tt0111161"])
        self.assertEqual(resp.payload.total_results, "1")
        self.assertEqual(json.loads(resp.raw), body)

        args, kwargs = get.call_args
        self.assertEqual(args[0], "http://omdb.test/")
        self.assertEqual(kwargs["params"], {"s": "Shawshank", "page": 2, "apikey": "secret"})
        self.assertEqual(kwargs["timeout"], 10)

    def test_search_no_results_is_not_found(self):
        body = {"Response": "False", "Error": "Movie not found!"}
        with patch.object(self.client.session, "get", return_value=http_response(body)):
            with self.assertRaises(NotFoundException) as ctx:
                self.client.search_by_title("zzzzzz")
        self.assertIn("Movie not found!", ctx.exception.message)

    def test_detail_success(self):
        body = detail_payload("tt0068646", "The Godfather", "Crime, Drama", year="1972")
        with patch.object(self.client.session, "get", return_value=http_response(body)) as get:
            resp = self.client.get_detail("tt0068646")

        self.assertEqual(resp.payload.title, "The Godfather")
        self.assertEqual(resp.payload.genre, "Crime, Drama")
        self.assertEqual(resp.payload.imdb_rating, "8.1")
        self.assertEqual(get.call_args[1]["params"]["i"], "tt0068646")
        self.assertEqual(get.call_args[1]["params"]["plot"], "full")

    def test_detail_not_found(self):
        body = {"Response": "False", "Error": "Incorrect IMDb ID."}
        with patch.object(self.client.session, "get", return_value=http_response(body)):
            with self.assertRaises(NotFoundException):
                self.client.get_detail("tt9999999")

    def test_transport_error_is_external_error(self):
        with patch.object(self.client.session, "get", side_effect=requests.exceptions.ConnectTimeout("slow")):
            with self.assertRaises(ExternalServiceException):
                self.client.get_detail("tt0111161")

    def test_http_error_status_is_external_error(self):
        with patch.object(self.client.session, "get", return_value=http_response("oops", status_code=503)):
            with self.assertRaises(ExternalServiceException):
                self.client.search_by_title("Drama")

    def test_malformed_body_is_external_error(self):
        with patch.object(self.client.session, "get", return_value=http_response("<html>")):
            with self.assertRaises(ExternalServiceException):
                self.client.search_by_title("Drama")

    def test_unexpected_shape_is_external_error(self):
        body = {"Response": "True", "Search": [{"Title": "No id"}]}
        with patch.object(self.client.session, "get", return_value=http_response(body)):
            with self.assertRaises(ExternalServiceException):
                self.client.search_by_title("Drama")

    def test_deadline_shortens_timeout(self):
        body = detail_payload("tt0111161", "The Shawshank Redemption", "Drama")
        with patch.object(self.client.session, "get", return_value=http_response(body)) as get:
            self.client.get_detail("tt0111161", Deadline.after(2))
        self.assertLessEqual(get.call_args[1]["timeout"], 2)

    def test_cancelled_deadline_skips_request(self):
        cancel = threading.Event()
        cancel.set()
        with patch.object(self.client.session, "get") as get:
            with self.assertRaises(DeadlineExceededException):
                self.client.get_detail("tt0111161", Deadline(cancel_event=cancel))
        get.assert_not_called()


if __name__ == '__main__':
    unittest.main()
