"""Configuration module"""
from .config import PARSER_CONFIG, SAMPLING_CONFIG, LOGGING_CONFIG, validate_config

__all__ = ['PARSER_CONFIG', 'SAMPLING_CONFIG', 'LOGGING_CONFIG', 'validate_config']
