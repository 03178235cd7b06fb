"""
Tests for the Backend protocol.
"""

from pylinsolve.core.protocols import Backend
from pylinsolve.lu.backends.cpu import CPULUBackend


class TestBackendProtocol:

    def test_cpu_backend_conforms(self):
        assert isinstance(CPULUBackend(), Backend)

    def test_plain_object_does_not_conform(self):
        assert not isinstance(object(), Backend)

    def test_backend_name(self):
        assert CPULUBackend().name == 'cpu_lu'
