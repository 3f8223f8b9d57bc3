from .mock_sampler import MockSampleDevice

__all__ = ["MockSampleDevice"]
