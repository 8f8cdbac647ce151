"""Configuration"""

# 解析器 / 编译缓存参数
PARSER_CONFIG = {
    "cache_size": 256,  # compiled programs kept per FormulaEvaluator
    "default_free_variable": "x",
    "enable_special_functions": False,  # gamma/erf/beta/jv/laguerre reserve their names
}

# 命令行采样网格
SAMPLING_CONFIG = {
    "start": -5.0,
    "stop": 5.0,
    "num": 11,
}

# 日志配置
LOGGING_CONFIG = {
    "level": "INFO",
    "format": '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
}


def validate_config():
    """Sanity checks for the settings above"""
    assert PARSER_CONFIG["cache_size"] >= 0, "cache_size must be non-negative"
    assert PARSER_CONFIG["default_free_variable"], "default_free_variable must be a name"
    assert SAMPLING_CONFIG["num"] >= 1, "num must be at least 1"
    assert SAMPLING_CONFIG["start"] <= SAMPLING_CONFIG["stop"], "start must not exceed stop"
    assert LOGGING_CONFIG["level"] in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"), "unknown log level"
    return True
