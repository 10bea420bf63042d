# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Integration tests for the /app/rest/v2/services endpoints."""

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from hemis.api.dependencies import (
    get_captcha_service,
    get_classifier_lookup,
    get_contract_lookup,
    get_diploma_blank_lookup,
    get_diploma_lookup,
    get_employment_service,
    get_faculty_lookup,
    get_guvd_service,
    get_otm_lookup,
    get_outbound_client,
    get_passport_service,
    get_personal_data_service,
    get_social_service,
    get_student_lookup,
    get_tax_service,
)
from hemis.infrastructure.cache import RedisError

SERVICES = "/app/rest/v2/services"
PINFL = "31234567890123"


def override(app, dependency, **methods) -> MagicMock:
    service = MagicMock()
    for name, result in methods.items():
        setattr(service, name, AsyncMock(return_value=result))
    app.dependency_overrides[dependency] = lambda: service
    return service


class TestCaptcha:
    @pytest.mark.parametrize(
        "path",
        [
            "/captcha/getNumericCaptcha",
            "/hemishe_CaptchaService/getNumericCaptcha",
        ],
    )
    def test_public_numeric(self, app, client, path) -> None:
        captcha = override(
            app,
            get_captcha_service,
            generate_numeric={"captchaId": "abc", "captchaType": "numeric"},
        )

        response = client.get(f"{SERVICES}{path}")

        assert response.status_code == 200
        assert response.json()["captchaId"] == "abc"
        captcha.generate_numeric.assert_awaited_once()

    def test_public_arithmetic(self, app, client) -> None:
        override(app, get_captcha_service, generate_arithmetic={"captchaType": "arithmetic"})

        response = client.get(f"{SERVICES}/captcha/getArithmeticCaptcha")

        assert response.json() == {"captchaType": "arithmetic"}


class TestPassportData:
    def test_requires_authentication(self, app, client) -> None:
        override(app, get_passport_service, get_data={"success": True})

        response = client.get(f"{SERVICES}/passport-data/getData", params={"pinfl": PINFL})

        assert response.status_code == 401

    @pytest.mark.parametrize(
        "path", ["/passport-data/getDataBySN", "/hemishe_PassportDataService/getDataBySN"]
    )
    def test_get_data_by_sn(self, app, client, auth_headers, path) -> None:
        service = override(app, get_passport_service, get_data_by_sn={"success": True})

        response = client.get(
            f"{SERVICES}{path}",
            params={
                "pinfl": PINFL,
                "seriaNumber": "AA1234567",
                "captchaId": "abc",
                "captchaValue": "52817",
            },
            headers=auth_headers,
        )

        assert response.status_code == 200
        assert response.json() == {"success": True}
        service.get_data_by_sn.assert_awaited_once_with(PINFL, "AA1234567", "abc", "52817")

    def test_failure_is_http_200(self, app, client, auth_headers) -> None:
        failure = {
            "success": False,
            "code": "service_not_available",
            "message": "PassportDataService.getData not available",
        }
        override(app, get_passport_service, get_data=failure)

        response = client.get(
            f"{SERVICES}/hemishe_PassportDataService/getData",
            params={"pinfl": PINFL, "givenDate": "2020-01-15"},
            headers=auth_headers,
        )

        assert response.status_code == 200
        assert response.json() == failure

    def test_personal_data(self, app, client, auth_headers) -> None:
        service = override(
            app, get_personal_data_service, get_personal_data={"success": True, "code": "success"}
        )

        response = client.get(
            f"{SERVICES}/hemishe_PersonalDataService/getPersonalData",
            params={"pinfl": PINFL, "serial": "AA"},
            headers=auth_headers,
        )

        assert response.json()["code"] == "success"
        service.get_personal_data.assert_awaited_once_with(PINFL, "AA")


class TestRegistries:
    def test_guvd_objects(self, app, client, auth_headers) -> None:
        service = override(app, get_guvd_service, objects={"success": True, "data": []})

        response = client.get(
            f"{SERVICES}/hemishe_GuvdService/objects",
            params={"type": "street", "query": "Chilonzor"},
            headers=auth_headers,
        )

        assert response.status_code == 200
        service.objects.assert_awaited_once_with("street", "Chilonzor")

    def test_tax_rent(self, app, client, auth_headers) -> None:
        service = override(app, get_tax_service, rent={"success": True, "is_paid": False})

        response = client.get(
            f"{SERVICES}/hemishe_TaxService/rent",
            params={"pinfl": PINFL, "period": "2024"},
            headers=auth_headers,
        )

        assert response.json() == {"success": True, "is_paid": False}
        service.rent.assert_awaited_once_with(PINFL, "2024")

    def test_social_vtek_aliases(self, app, client, auth_headers) -> None:
        service = override(app, get_social_service, vtek={"success": True})

        client.get(
            f"{SERVICES}/hemishe_SocialService/vtek",
            params={"pinfl": PINFL, "birthDate": "2003-05-14", "birthDocument": "I-TN 1"},
            headers=auth_headers,
        )

        service.vtek.assert_awaited_once_with(PINFL, "2003-05-14", "I-TN 1")

    def test_employment_workbook(self, app, client, auth_headers) -> None:
        service = override(app, get_employment_service, workbook={"success": True})

        response = client.get(
            f"{SERVICES}/hemishe_EmploymentService/workbook",
            params={"pinfl": PINFL},
            headers=auth_headers,
        )

        assert response.status_code == 200
        service.workbook.assert_awaited_once_with(PINFL)


class TestInternalServices:
    def test_student_verify(self, app, client, auth_headers) -> None:
        service = override(
            app, get_student_lookup, verify={"exists": False, "pinfl": PINFL}
        )

        response = client.get(
            f"{SERVICES}/hemishe_StudentService/verify",
            params={"pinfl": PINFL},
            headers=auth_headers,
        )

        assert response.json() == {"exists": False, "pinfl": PINFL}
        service.verify.assert_awaited_once_with(PINFL)

    def test_student_by_id_alias(self, app, client, auth_headers, sample_student_id) -> None:
        service = override(app, get_student_lookup, get_by_id={"success": True})

        client.get(
            f"{SERVICES}/hemishe_StudentService/getById",
            params={"id": sample_student_id},
            headers=auth_headers,
        )

        service.get_by_id.assert_awaited_once_with(sample_student_id)

    def test_diploma_by_hash(self, app, client, auth_headers) -> None:
        service = override(
            app, get_diploma_lookup, by_hash={"success": True, "data": {"verified": True}}
        )

        response = client.get(
            f"{SERVICES}/hemishe_DiplomaService/byhash",
            params={"hash": "f00d"},
            headers=auth_headers,
        )

        assert response.json()["data"]["verified"] is True
        service.by_hash.assert_awaited_once_with("f00d")

    def test_contract_get(self, app, client, auth_headers) -> None:
        service = override(app, get_contract_lookup, get={"success": True, "data": {}})

        client.get(
            f"{SERVICES}/hemishe_ContractService/get",
            params={"pinfl": PINFL, "year": "2024"},
            headers=auth_headers,
        )

        service.get.assert_awaited_once_with(PINFL, "2024")


class TestPassportWithoutRedis:
    @pytest.fixture(autouse=True)
    def redis_down(self):
        with patch(
            "hemis.api.dependencies.get_redis",
            side_effect=RedisError("Redis not initialized"),
        ):
            yield

    @pytest.fixture
    def upstream(self, app) -> list[httpx.Request]:
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            if request.url.path.endswith("/oauth2/token"):
                return httpx.Response(200, json={"access_token": "guvd", "expires_in": 600})
            return httpx.Response(200, json={"surname": "ALIYEV"})

        app.dependency_overrides[get_outbound_client] = lambda: httpx.AsyncClient(
            transport=httpx.MockTransport(handler)
        )
        return requests

    def test_lookup_without_captcha_still_answers(self, client, auth_headers, upstream) -> None:
        response = client.get(
            f"{SERVICES}/passport-data/getData",
            params={"pinfl": PINFL, "givenDate": "2020-01-15"},
            headers=auth_headers,
        )

        assert response.status_code == 200
        assert response.json() == {"surname": "ALIYEV", "success": True}

    def test_captcha_lookup_fails_softly(self, client, auth_headers, upstream) -> None:
        response = client.get(
            f"{SERVICES}/passport-data/getDataBySN",
            params={
                "pinfl": PINFL,
                "seriaNumber": "AA1234567",
                "captchaId": "abc",
                "captchaValue": "52817",
            },
            headers=auth_headers,
        )

        assert response.status_code == 200
        assert response.json()["code"] == "invalid_captcha"
        assert not any(r.url.path.endswith("/data") for r in upstream)


class TestLegacyLookups:
    def test_classifier_info_is_a_plain_list(self, app, client, auth_headers) -> None:
        service = MagicMock()
        service.info.return_value = ["country", "gender"]
        app.dependency_overrides[get_classifier_lookup] = lambda: service

        response = client.get(f"{SERVICES}/classifiers/info", headers=auth_headers)

        assert response.status_code == 200
        assert response.json() == ["country", "gender"]

    def test_classifier_single(self, app, client, auth_headers) -> None:
        items = [{"code": "11", "name": "Erkak", "name_ru": None, "name_en": None, "active": True}]
        service = override(app, get_classifier_lookup, single=items)

        response = client.get(
            f"{SERVICES}/classifiers/single",
            params={"classifier": "gender"},
            headers=auth_headers,
        )

        assert response.json() == items
        service.single.assert_awaited_once_with("gender")

    def test_classifier_hokimiyat(self, app, client, auth_headers) -> None:
        override(app, get_classifier_lookup, hokimiyat={"regions": [], "count": 0})

        response = client.get(f"{SERVICES}/classifiers/hokimiyat", headers=auth_headers)

        assert response.json() == {"regions": [], "count": 0}

    def test_classifiers_require_authentication(self, app, client) -> None:
        override(app, get_classifier_lookup, all_items={})

        response = client.get(f"{SERVICES}/classifiers/allItems")

        assert response.status_code == 401

    def test_otm_student_info_aliases(
        self, app, client, auth_headers, sample_student_id
    ) -> None:
        service = override(
            app,
            get_otm_lookup,
            student_info_by_id={"success": True, "data": {}},
            student_info_by_pinfl={"success": True, "data": {}},
        )

        client.get(
            f"{SERVICES}/otm/studentInfoById",
            params={"studentId": sample_student_id},
            headers=auth_headers,
        )
        client.get(
            f"{SERVICES}/otm/studentInfoByPinfl",
            params={"pinfl": PINFL},
            headers=auth_headers,
        )

        service.student_info_by_id.assert_awaited_once_with(sample_student_id)
        service.student_info_by_pinfl.assert_awaited_once_with(PINFL)

    def test_faculty_endpoints(self, app, client, auth_headers) -> None:
        service = override(
            app,
            get_faculty_lookup,
            list_by_university={"success": True, "data": [], "count": 0},
            get={"success": True, "data": {}},
            count_by_university={"success": True, "count": 3},
        )

        listed = client.get(
            f"{SERVICES}/faculty/list", params={"universityCode": "00001"}, headers=auth_headers
        )
        counted = client.get(
            f"{SERVICES}/faculty/count", params={"universityCode": "00001"}, headers=auth_headers
        )
        client.get(f"{SERVICES}/faculty/get", params={"code": "F01"}, headers=auth_headers)

        assert listed.json()["count"] == 0
        assert counted.json() == {"success": True, "count": 3}
        service.list_by_university.assert_awaited_once_with("00001")
        service.count_by_university.assert_awaited_once_with("00001")
        service.get.assert_awaited_once_with("F01")

    def test_diploma_blank_get(self, app, client, auth_headers) -> None:
        service = override(
            app,
            get_diploma_blank_lookup,
            get={"success": True, "university": "00001", "year": 2024, "blanks": [], "count": 0},
        )

        response = client.get(
            f"{SERVICES}/diplom-blank/get",
            params={"university": "00001", "year": "2024"},
            headers=auth_headers,
        )

        assert response.json()["year"] == 2024
        service.get.assert_awaited_once_with("00001", "2024")
