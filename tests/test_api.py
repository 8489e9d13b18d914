"""
诊断接口测试
使用FastAPI TestClient测试只读查询端点
"""

import pytest
from fastapi.testclient import TestClient

from modsim.core.module_registry import ModuleRegistry
from modsim.main import create_app
from modsim.models.module_model import ModuleDescriptor


@pytest.fixture
def client():
    """基于独立注册表的测试客户端"""
    registry = ModuleRegistry()
    registry.register(
        ModuleDescriptor(name="consumer", inputs=["r"], outputs=["y"], parameters={"k": 2}),
        {"init": lambda state: None},
    )
    registry.register(ModuleDescriptor(name="producer", outputs=["r"]), {"init": lambda state: None})
    registry.register(ModuleDescriptor(name="standalone"), {"init": lambda state: None})
    return TestClient(create_app(registry))


class TestHealth:
    """健康检查测试"""

    def test_health(self, client):
        """测试健康检查"""
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestModules:
    """模块查询测试"""

    def test_list_modules(self, client):
        """测试模块列表按注册顺序返回"""
        response = client.get("/api/modules")

        assert response.status_code == 200
        body = response.json()
        assert body["success"]
        assert [m["name"] for m in body["data"]] == ["consumer", "producer", "standalone"]

    def test_get_module(self, client):
        """测试获取单个模块"""
        response = client.get("/api/modules/consumer")

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["parameters"] == {"k": 2}
        assert data["producers_of_inputs"] == {"r": ["producer"]}
        assert data["consumers_of_outputs"] == {"y": []}

    def test_get_unknown_module(self, client):
        """测试获取未注册模块"""
        response = client.get("/api/modules/wolves")

        assert response.status_code == 404


class TestGraph:
    """依赖图解析测试"""

    def test_resolve_all(self, client):
        """测试解析全部模块"""
        response = client.post("/api/graph/resolve", json={})

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["order"] == ["producer", "consumer", "standalone"]
        assert data["edges"] == [{"from": "producer", "to": "consumer", "objects": ["r"]}]
        assert data["unmatched_inputs"] == {}

    def test_resolve_subset(self, client):
        """测试解析部分模块"""
        response = client.post("/api/graph/resolve", json={"modules": ["consumer"]})

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["order"] == ["consumer"]
        assert data["unmatched_inputs"] == {"consumer": ["r"]}

    def test_resolve_unknown(self, client):
        """测试解析未注册模块"""
        response = client.post("/api/graph/resolve", json={"modules": ["wolves"]})

        assert response.status_code == 404


class TestConfig:
    """配置接口测试"""

    def test_default_config(self, client, monkeypatch):
        """测试默认配置"""
        monkeypatch.delenv("MODSIM_DEFAULT_CONFIG", raising=False)
        response = client.get("/api/config/default")

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["start_time"] == 0.0
        assert data["time_unit"] == "year"

    def test_default_config_from_file(self, client, monkeypatch, tmp_path):
        """测试从YAML文件读取默认配置"""
        path = tmp_path / "default.yaml"
        path.write_text("modules: [producer]\nend_time: 3\n", encoding="utf-8")
        monkeypatch.setenv("MODSIM_DEFAULT_CONFIG", str(path))

        data = client.get("/api/config/default").json()["data"]
        assert data["modules"] == ["producer"]
        assert data["end_time"] == 3.0

    def test_default_config_malformed_file(self, client, monkeypatch, tmp_path):
        """测试默认配置文件无法解析或无效"""
        broken = tmp_path / "broken.yaml"
        broken.write_text("modules: [producer\n", encoding="utf-8")
        invalid = tmp_path / "invalid.yaml"
        invalid.write_text("start_time: 5\nend_time: 1\n", encoding="utf-8")

        for path in [broken, invalid]:
            monkeypatch.setenv("MODSIM_DEFAULT_CONFIG", str(path))
            response = client.get("/api/config/default")

            assert response.status_code == 200
            body = response.json()
            assert not body["success"]
            assert body["data"] is None

    def test_validate_valid(self, client):
        """测试验证有效配置"""
        response = client.post(
            "/api/config/validate",
            json={"modules": ["consumer", "producer"], "end_time": 5},
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["valid"]
        assert data["errors"] == []

    def test_validate_unknown_module(self, client):
        """测试验证引用未注册模块的配置"""
        data = client.post(
            "/api/config/validate",
            json={"modules": ["wolves"]},
        ).json()["data"]

        assert not data["valid"]
        assert any("wolves" in e for e in data["errors"])

    def test_validate_time_range(self, client):
        """测试验证结束时间早于开始时间"""
        data = client.post(
            "/api/config/validate",
            json={"modules": [], "start_time": 5, "end_time": 1},
        ).json()["data"]

        assert not data["valid"]
