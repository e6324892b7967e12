"""Unit tests for CLI modules — src.cli.models and src.cli.multimodal."""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest

from src.cli import models as models_cli
from src.cli import multimodal as multimodal_cli
from src.config.settings import Settings
from src.models.provider import ModelInfo, ProviderResponse
from src.providers.llm.huggingface_provider import HuggingFaceProvider
from src.providers.llm.lmstudio_provider import LMStudioProvider


# ======================================================================
# Shared helpers
# ======================================================================


def _settings(**overrides) -> Settings:
    """Build a Settings instance with no provider configured."""
    defaults = {
        "huggingface_api_key": "",
        "lmstudio_api_key": "",
        "lmstudio_api_base_url": "",
        "app_env": "test",
        "log_level": "WARNING",
    }
    defaults.update(overrides)
    return Settings(**defaults)


@pytest.fixture(autouse=True)
def _no_logging_setup():
    # Keep structlog from binding to capsys' temporary streams.
    with patch("src.utils.logging.configure_logging"):
        yield


# ======================================================================
# src.cli.models
# ======================================================================


class TestModelsCommand:
    def test_text_table(self, capsys: pytest.CaptureFixture[str]) -> None:
        with patch.object(models_cli, "Settings", return_value=_settings()):
            assert models_cli.main([]) == 0

        out = capsys.readouterr().out
        assert "HuggingFace\n-----------" in out
        assert "Salesforce/blip2-opt-2.7b" in out
        assert "n/a" in out
        assert "LMStudio" in out

    def test_json_output(self, capsys: pytest.CaptureFixture[str]) -> None:
        with patch.object(models_cli, "Settings", return_value=_settings()):
            assert models_cli.main(["--json"]) == 0

        payload = json.loads(capsys.readouterr().out)
        assert len(payload) == 7
        assert payload[0]["provider"] == "HuggingFace"
        assert set(payload[0]) == {"name", "label", "provider", "max_token_allowed"}

    def test_provider_filter(self, capsys: pytest.CaptureFixture[str]) -> None:
        with patch.object(models_cli, "Settings", return_value=_settings()):
            assert models_cli.main(["--provider", "LMStudio", "--json"]) == 0

        payload = json.loads(capsys.readouterr().out)
        assert [m["name"] for m in payload] == ["Qwen/Qwen2.5-Coder-32B-Instruct"]

    def test_unknown_provider(self, capsys: pytest.CaptureFixture[str]) -> None:
        with patch.object(models_cli, "Settings", return_value=_settings()):
            assert models_cli.main(["--provider", "OpenRouter"]) == 1

        assert capsys.readouterr().err.startswith("Error:")

    def test_dynamic_listing(
        self,
        capsys: pytest.CaptureFixture[str],
        sample_dynamic_models: list[ModelInfo],
    ) -> None:
        listing = AsyncMock(return_value=sample_dynamic_models)
        with (
            patch.object(models_cli, "Settings", return_value=_settings(lmstudio_api_base_url="http://gpu-box:1234")),
            patch.object(LMStudioProvider, "list_dynamic_models", listing),
        ):
            assert models_cli.main(["--dynamic", "--json"]) == 0

        payload = json.loads(capsys.readouterr().out)
        assert len(payload) == 9
        assert payload[-1]["name"] == "qwen2.5-7b-instruct"
        assert listing.await_args.kwargs["server_env"] == {"LMSTUDIO_API_BASE_URL": "http://gpu-box:1234"}

    def test_empty_table(self) -> None:
        assert models_cli._format_text_output([]) == "No models available."


# ======================================================================
# src.cli.multimodal
# ======================================================================


class TestMultimodalCommand:
    _ARGS = ["--model", "Salesforce/blip2-opt-2.7b", "--prompt", "describe this"]

    def test_missing_key(self, capsys: pytest.CaptureFixture[str]) -> None:
        with patch.object(multimodal_cli, "Settings", return_value=_settings()):
            assert multimodal_cli.main(self._ARGS) == 1

        assert "Missing API key" in capsys.readouterr().err

    def test_json_response_printed(self, capsys: pytest.CaptureFixture[str]) -> None:
        response = ProviderResponse(
            provider="HuggingFace",
            model="Salesforce/blip2-opt-2.7b",
            status_code=200,
            content_type="application/json",
            data=[{"generated_text": "a cat on a sofa"}],
        )
        generate = AsyncMock(return_value=response)
        with (
            patch.object(multimodal_cli, "Settings", return_value=_settings(huggingface_api_key="hf_test")),
            patch.object(HuggingFaceProvider, "generate_multimodal_response", generate),
        ):
            assert multimodal_cli.main(self._ARGS) == 0

        assert "a cat on a sofa" in capsys.readouterr().out
        generate.assert_awaited_once_with("Salesforce/blip2-opt-2.7b", "describe this", None, "hf_test")

    def test_image_attached(self, tmp_path: Path) -> None:
        image = tmp_path / "photo.png"
        image.write_bytes(b"\x89PNG fake")
        response = ProviderResponse(provider="HuggingFace", model="m", status_code=200, data={})
        generate = AsyncMock(return_value=response)
        with (
            patch.object(multimodal_cli, "Settings", return_value=_settings(huggingface_api_key="hf_test")),
            patch.object(HuggingFaceProvider, "generate_multimodal_response", generate),
        ):
            assert multimodal_cli.main([*self._ARGS, "--image", str(image)]) == 0

        assert generate.await_args.args[2] == b"\x89PNG fake"

    def test_missing_image_file(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        with patch.object(multimodal_cli, "Settings", return_value=_settings(huggingface_api_key="hf_test")):
            assert multimodal_cli.main([*self._ARGS, "--image", str(tmp_path / "nope.png")]) == 1

        assert "image not found" in capsys.readouterr().err

    def test_binary_response_needs_output(self, capsys: pytest.CaptureFixture[str]) -> None:
        response = ProviderResponse(
            provider="HuggingFace",
            model="CompVis/stable-diffusion-v1-4",
            status_code=200,
            content_type="image/png",
            data=b"\x89PNG generated",
        )
        with (
            patch.object(multimodal_cli, "Settings", return_value=_settings(huggingface_api_key="hf_test")),
            patch.object(HuggingFaceProvider, "generate_multimodal_response", AsyncMock(return_value=response)),
        ):
            assert multimodal_cli.main(self._ARGS) == 1

        assert "--output" in capsys.readouterr().err

    def test_binary_response_written(self, tmp_path: Path) -> None:
        target = tmp_path / "out.png"
        response = ProviderResponse(
            provider="HuggingFace",
            model="CompVis/stable-diffusion-v1-4",
            status_code=200,
            content_type="image/png",
            data=b"\x89PNG generated",
        )
        with (
            patch.object(multimodal_cli, "Settings", return_value=_settings(huggingface_api_key="hf_test")),
            patch.object(HuggingFaceProvider, "generate_multimodal_response", AsyncMock(return_value=response)),
        ):
            assert multimodal_cli.main([*self._ARGS, "-o", str(target)]) == 0

        assert target.read_bytes() == b"\x89PNG generated"
