import json

import pytest

from kmeans_engine import EngineConfig, InvalidInputError, KMeansEngine


def test_defaults_are_valid():
    config = EngineConfig().validate()
    assert config.max_iters == 300
    assert config.empty_cluster_policy == "reseed"


@pytest.mark.parametrize("field, value", [
    ("dtype", "int32"),
    ("dtype", "not-a-dtype"),
    ("max_iters", 0),
    ("empty_cluster_policy", "drop"),
    ("min_separation", -1.0),
    ("max_seed_attempts", 0),
    ("chunk_size", 0),
    ("n_clusters", -2),
])
def test_invalid_values_rejected(field, value):
    with pytest.raises(InvalidInputError):
        EngineConfig(**{field: value}).validate()


def test_from_dict_rejects_unknown_keys():
    with pytest.raises(InvalidInputError):
        EngineConfig.from_dict({"max_iters": 10, "tolerance": 0.1})


def test_from_json_round_trip(tmp_path):
    path = tmp_path / "engine.json"
    path.write_text(json.dumps({"max_iters": 25, "random_state": 3, "n_clusters": 4}))
    config = EngineConfig.from_json(path)
    assert config.max_iters == 25
    assert config.to_dict()["random_state"] == 3


def test_engine_keywords_override_config():
    base = EngineConfig(max_iters=10, n_clusters=4)
    engine = KMeansEngine(base, max_iters=50)
    assert engine.config.max_iters == 50
    assert engine.n_clusters == 4
    assert base.max_iters == 10


def test_engine_rejects_unknown_keyword():
    with pytest.raises(InvalidInputError):
        KMeansEngine(tolerance=0.1)
