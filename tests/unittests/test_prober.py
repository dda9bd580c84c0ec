# Copyright 2026 The Kubernetes Authors.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

import warnings
from unittest import mock

import requests
from urllib3.exceptions import InsecureRequestWarning

from k8s_health_probe.models import FALLBACK_TARGET, ResolvedTarget
from k8s_health_probe.prober import Prober

DISCOVERED = ResolvedTarget(scheme="http", host="34.123.45.67", port=80)


def _response(status_code: int, body: bytes = b"", url: str = DISCOVERED.url) -> requests.Response:
    response = requests.Response()
    response.status_code = status_code
    response._content = body
    response.encoding = "utf-8"
    response.url = url
    return response


class TestProber:
    def setup_method(self):
        self.session_mock = mock.MagicMock()
        self.prober = Prober(session=self.session_mock)

    def test_discovered_target_is_verified(self):
        self.session_mock.get.return_value = _response(200, b"<h1>hello</h1>")

        result = self.prober.probe(DISCOVERED)

        self.session_mock.get.assert_called_once_with(
            "http://34.123.45.67:80", allow_redirects=True, verify=True, timeout=None)
        assert result.ok
        assert result.status_code == 200
        assert result.body == "<h1>hello</h1>"
        assert result.error is None

    def test_fallback_target_skips_verification(self):
        self.session_mock.get.return_value = _response(
            200, b"ok", url=FALLBACK_TARGET.url)

        result = self.prober.probe(FALLBACK_TARGET)

        self.session_mock.get.assert_called_once_with(
            "https://kubernetes.default.svc", allow_redirects=True, verify=False, timeout=None)
        assert result.ok

    def _warn_and_respond(self, *args, **kwargs):
        warnings.warn("Unverified HTTPS request is being made", InsecureRequestWarning)
        return _response(200, b"ok", url=FALLBACK_TARGET.url)

    def test_fallback_target_silences_insecure_warning(self):
        self.session_mock.get.side_effect = self._warn_and_respond

        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            result = self.prober.probe(FALLBACK_TARGET)

        assert result.ok
        assert not [w for w in caught if issubclass(w.category, InsecureRequestWarning)]

    def test_discovered_target_keeps_insecure_warning(self):
        self.session_mock.get.side_effect = self._warn_and_respond

        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            self.prober.probe(DISCOVERED)

        assert [w for w in caught if issubclass(w.category, InsecureRequestWarning)]

    def test_error_status_is_a_failure(self):
        self.session_mock.get.return_value = _response(403, b'{"kind":"Status"}')

        result = self.prober.probe(DISCOVERED)

        assert not result.ok
        assert result.status_code == 403
        assert result.body == '{"kind":"Status"}'
        assert "403" in result.error

    def test_connection_error_is_a_failure(self):
        self.session_mock.get.side_effect = requests.exceptions.ConnectionError(
            "Connection refused")

        result = self.prober.probe(DISCOVERED)

        assert not result.ok
        assert result.status_code is None
        assert result.error == "Connection refused"

    def test_timeout_is_passed(self):
        prober = Prober(timeout=2.5, session=self.session_mock)
        self.session_mock.get.return_value = _response(200)

        prober.probe(DISCOVERED)

        assert self.session_mock.get.call_args.kwargs["timeout"] == 2.5

    def test_close_closes_session(self):
        self.prober.close()

        self.session_mock.close.assert_called_once_with()


def test_no_retries_by_default():
    prober = Prober()

    adapter = prober.session.get_adapter("http://34.123.45.67:80")
    assert adapter.max_retries.total == 0


def test_retries_are_mounted():
    prober = Prober(retries=3)

    for url in ("http://34.123.45.67:80", "https://kubernetes.default.svc"):
        retry = prober.session.get_adapter(url).max_retries
        assert retry.total == 3
        assert 503 in retry.status_forcelist
