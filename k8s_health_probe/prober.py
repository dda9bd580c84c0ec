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

import logging
import warnings

import requests
from requests.adapters import HTTPAdapter
from urllib3.exceptions import InsecureRequestWarning
from urllib3.util.retry import Retry

from .models import ProbeResult, ResolvedTarget


class Prober:
    """
    Sends the single outbound GET request against a resolved target.
    """

    def __init__(
        self,
        timeout: float | None = None,  # None waits indefinitely
        retries: int = 0,
        session: requests.Session | None = None,
    ):
        self.timeout = timeout
        self.session = session or requests.Session()
        if retries > 0:
            retry = Retry(
                total=retries,
                backoff_factor=0.5,
                status_forcelist=[500, 502, 503, 504],
                allowed_methods=["GET"]
            )
            self.session.mount("http://", HTTPAdapter(max_retries=retry))
            self.session.mount("https://", HTTPAdapter(max_retries=retry))

    def probe(self, target: ResolvedTarget) -> ProbeResult:
        """
        GETs the target, following redirects. Certificate verification follows
        `target.verify_tls`. Failures are returned, not raised.
        """
        url = target.url
        logging.info(f"Requesting {url} (verify TLS: {target.verify_tls})")
        try:
            with warnings.catch_warnings():
                if not target.verify_tls:
                    warnings.simplefilter("ignore", InsecureRequestWarning)
                response = self.session.get(
                    url,
                    allow_redirects=True,
                    verify=target.verify_tls,
                    timeout=self.timeout,
                )
            response.raise_for_status()
        except requests.exceptions.HTTPError as e:
            logging.error(f"Request to {url} returned an error status: {e}")
            return ProbeResult(
                url=url,
                status_code=e.response.status_code if e.response is not None else None,
                body=e.response.text if e.response is not None else "",
                error=str(e),
            )
        except requests.exceptions.RequestException as e:
            logging.error(f"Request to {url} failed: {e}")
            return ProbeResult(url=url, error=str(e))

        return ProbeResult(
            url=url, ok=True, status_code=response.status_code, body=response.text)

    def close(self):
        self.session.close()
