import os
import unittest
from io import BytesIO
from unittest import mock

from airfryer_backend import create_app
from airfryer_backend.config import DEFAULT_MAX_UPLOAD_BYTES
from airfryer_backend.services.llm import VisionLLMResult

CHICKEN_WINGS = {
    "foodName": "Chicken Wings",
    "cookingTime": "25",
    "cookingTemperatureCelsius": "200",
}


class _StubVisionClient:
    def __init__(self, parsed_json=None, *, raw_text=None, error=None):
        self.parsed_json = parsed_json
        self.raw_text = raw_text if raw_text is not None else str(parsed_json)
        self.error = error
        self.calls: list[dict] = []

    def analyze_image(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return VisionLLMResult(raw_text=self.raw_text, parsed_json=self.parsed_json)


def _build_app(client=None):
    with mock.patch.dict(os.environ):
        os.environ.pop("AIRFRYER_LLM_API_KEY", None)
        os.environ.pop("OPENAI_API_KEY", None)
        app = create_app()
    app.config["TESTING"] = True
    if client is not None:
        app.extensions["vision_llm_client"] = client
    return app


class IdentifyFoodApiTests(unittest.TestCase):
    def test_returns_cooking_instructions(self):
        llm = _StubVisionClient(dict(CHICKEN_WINGS))
        http = _build_app(llm).test_client()

        response = http.post(
            "/api/identify-food", json={"photoUrl": "https://example.test/a.jpg"}
        )

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.get_json(), CHICKEN_WINGS)
        self.assertEqual(len(llm.calls), 1)
        self.assertEqual(llm.calls[0]["image_url"], "https://example.test/a.jpg")

    def test_accepts_form_field(self):
        llm = _StubVisionClient(dict(CHICKEN_WINGS))
        http = _build_app(llm).test_client()

        response = http.post(
            "/api/identify-food", data={"photoUrl": "data:image/png;base64,AAAA"}
        )

        self.assertEqual(response.status_code, 200)
        self.assertEqual(llm.calls[0]["image_url"], "data:image/png;base64,AAAA")

    def test_accepts_file_upload(self):
        llm = _StubVisionClient(dict(CHICKEN_WINGS))
        http = _build_app(llm).test_client()

        response = http.post(
            "/api/identify-food",
            data={"image": (BytesIO(b"\x89PNG"), "wings.png", "image/png")},
            content_type="multipart/form-data",
        )

        self.assertEqual(response.status_code, 200)
        self.assertTrue(llm.calls[0]["image_url"].startswith("data:image/png;base64,"))

    def test_rejects_unusable_upload(self):
        llm = _StubVisionClient(dict(CHICKEN_WINGS))
        http = _build_app(llm).test_client()

        response = http.post(
            "/api/identify-food",
            data={"image": (BytesIO(b""), "wings.png", "image/png")},
            content_type="multipart/form-data",
        )

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.get_json(), {"message": "uploaded file was empty"})
        self.assertEqual(llm.calls, [])

    def test_missing_photo_makes_no_model_call(self):
        llm = _StubVisionClient(dict(CHICKEN_WINGS))
        http = _build_app(llm).test_client()

        response = http.post("/api/identify-food", json={"photoUrl": ""})

        self.assertEqual(response.status_code, 400)
        self.assertEqual(
            response.get_json(), {"message": "Please upload a photo of the food."}
        )
        self.assertEqual(llm.calls, [])

    def test_model_failure_is_reported_verbatim(self):
        llm = _StubVisionClient(error=RuntimeError("rate limited"))
        http = _build_app(llm).test_client()

        with self.assertLogs("airfryer_backend.services.submission", level="WARNING"):
            response = http.post(
                "/api/identify-food", json={"photoUrl": "https://example.test/a.jpg"}
            )

        self.assertEqual(response.status_code, 502)
        self.assertEqual(response.get_json(), {"message": "rate limited"})

    def test_unconfigured_client_returns_503(self):
        http = _build_app().test_client()

        with self.assertLogs("airfryer_backend.services.submission", level="WARNING"):
            response = http.post(
                "/api/identify-food", json={"photoUrl": "https://example.test/a.jpg"}
            )

        self.assertEqual(response.status_code, 503)
        self.assertEqual(
            response.get_json(), {"message": "vision LLM client is not configured"}
        )

    def test_oversized_submission_returns_message(self):
        llm = _StubVisionClient(dict(CHICKEN_WINGS))
        with mock.patch.dict(os.environ, {"AIRFRYER_MAX_UPLOAD_BYTES": "1000"}):
            http = _build_app(llm).test_client()
        photo_url = "data:image/png;base64," + "A" * 5000

        cases = {
            "json": {"json": {"photoUrl": photo_url}},
            "form": {"data": {"photoUrl": photo_url}},
        }
        for name, kwargs in cases.items():
            with self.subTest(encoding=name):
                response = http.post("/api/identify-food", **kwargs)
                self.assertEqual(response.status_code, 413)
                self.assertEqual(
                    response.get_json(),
                    {"message": "The photo is too large. Please use a smaller image."},
                )
        self.assertEqual(llm.calls, [])

    def test_same_photo_twice_is_not_cached(self):
        llm = _StubVisionClient(dict(CHICKEN_WINGS))
        http = _build_app(llm).test_client()

        for _ in range(2):
            http.post("/api/identify-food", json={"photoUrl": "https://example.test/a.jpg"})

        self.assertEqual(len(llm.calls), 2)


class AppFactoryTests(unittest.TestCase):
    def test_healthchecks(self):
        http = _build_app().test_client()

        for path in ("/healthz", "/api/healthz"):
            with self.subTest(path=path):
                response = http.get(path)
                self.assertEqual(response.status_code, 200)
                self.assertEqual(response.get_json(), {"status": "ok"})

    def test_configures_client_from_environment(self):
        env = {
            "AIRFRYER_LLM_API_KEY": "sk-test",
            "AIRFRYER_LLM_MODEL": "gpt-test",
            "AIRFRYER_LLM_PROMPT": "Name the food.",
        }
        with mock.patch("airfryer_backend.services.llm.OpenAI"):
            with mock.patch.dict(os.environ, env):
                app = create_app()

        client = app.extensions["vision_llm_client"]
        self.assertEqual(client.model, "gpt-test")
        self.assertEqual(app.config["IDENTIFY_FOOD_PROMPT"], "Name the food.")

    def test_invalid_upload_limit_falls_back_to_default(self):
        with mock.patch.dict(os.environ, {"AIRFRYER_MAX_UPLOAD_BYTES": "lots"}):
            app = create_app()

        self.assertEqual(app.config["MAX_CONTENT_LENGTH"], DEFAULT_MAX_UPLOAD_BYTES)


if __name__ == "__main__":
    unittest.main()
