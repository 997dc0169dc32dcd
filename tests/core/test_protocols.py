"""
Tests for the structural protocols.

Dataset is a DataSource; every domain backend is a Backend.
"""

import pytest

from statinsight.core import Backend, DataSource, Dataset
from statinsight.correlation.backends.cpu import CPUCorrelationBackend
from statinsight.descriptive.backends.cpu import CPUDescriptiveBackend
from statinsight.hypothesis.backends.cpu import CPUHypothesisBackend
from statinsight.normality.backends.cpu import CPUNormalityBackend
from statinsight.regression.backends.cpu import CPUQRBackend


class TestDataSource:

    def test_dataset_satisfies_protocol(self):
        ds = Dataset(("a",), ({"a": 1}, {"a": 2}))
        assert isinstance(ds, DataSource)
        assert ds.n_observations == 2

    def test_plain_object_does_not(self):
        assert not isinstance(object(), DataSource)


class TestBackend:

    @pytest.mark.parametrize("backend_cls, name", [
        (CPUDescriptiveBackend, "cpu_descriptive"),
        (CPUNormalityBackend, "cpu_normality"),
        (CPUHypothesisBackend, "cpu_hypothesis"),
        (CPUCorrelationBackend, "cpu_correlation"),
        (CPUQRBackend, "cpu_qr"),
    ])
    def test_backends_satisfy_protocol(self, backend_cls, name):
        backend = backend_cls()
        assert isinstance(backend, Backend)
        assert backend.name == name
