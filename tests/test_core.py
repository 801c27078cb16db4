"""
Tests for core data structures: RegNet, EvidenceFlag, PriorParameters, Transform.
"""

import numpy as np
import pandas as pd
import pytest

from motifprior.core import (
    EvidenceFlag,
    Identity,
    PriorParameters,
    RegNet,
    MalformedInputError,
    MotifPriorError,
)

from conftest import make_regnet


class TestRegNet:
    """Test RegNet construction and validation."""

    def test_zeros(self):
        """Test all-zero prior has the TF x gene shape and no evidence."""
        regnet = RegNet.zeros(pd.Index(["TF1", "TF2"]), pd.Index(["G1", "G2", "G3"]))
        assert regnet.shape == (2, 3)
        assert regnet.n_tfs == 2
        assert regnet.n_genes == 3
        assert regnet.n_edges == 0
        assert np.all(regnet.evidence_flags == EvidenceFlag.NONE)

    def test_tf_count_mismatch(self):
        """Test validation catches TF count mismatch."""
        with pytest.raises(ValueError, match="tf_ids length.*must match data rows"):
            RegNet(np.zeros((3, 2)), pd.Index(["TF1"]), pd.Index(["G1", "G2"]))

    def test_gene_count_mismatch(self):
        """Test validation catches gene count mismatch."""
        with pytest.raises(ValueError, match="gene_ids length.*must match data columns"):
            RegNet(np.zeros((1, 2)), pd.Index(["TF1"]), pd.Index(["G1"]))

    def test_flag_shape_mismatch(self):
        """Test validation catches evidence flag shape mismatch."""
        with pytest.raises(ValueError, match="evidence_flags shape"):
            RegNet(
                np.zeros((1, 2)), pd.Index(["TF1"]), pd.Index(["G1", "G2"]),
                evidence_flags=np.zeros((2, 2), dtype=int),
            )

    def test_requires_index(self):
        """Test identifiers must be pandas Index objects."""
        with pytest.raises(TypeError, match="tf_ids must be pd.Index"):
            RegNet(np.zeros((1, 1)), ["TF1"], pd.Index(["G1"]))

    def test_with_data_keeps_identifiers(self):
        """Test with_data shares identifiers and leaves the original untouched."""
        regnet = make_regnet([[0.5, 0.0]], ["TF1"], ["G1", "G2"])
        other = regnet.with_data(np.ones((1, 2)))

        assert other.tf_ids.equals(regnet.tf_ids)
        assert other.gene_ids.equals(regnet.gene_ids)
        np.testing.assert_array_equal(regnet.data, [[0.5, 0.0]])
        np.testing.assert_array_equal(other.data, [[1.0, 1.0]])

    def test_deep_copy_is_independent(self):
        """Test deep copy does not share arrays."""
        regnet = make_regnet([[0.5, 0.0]], ["TF1"], ["G1", "G2"])
        copied = regnet.copy()
        copied.data[0, 0] = 9.0
        assert regnet.data[0, 0] == 0.5

    def test_to_frame(self):
        """Test DataFrame view is labelled by TF and gene."""
        frame = make_regnet([[0.5, 0.0]], ["TF1"], ["G1", "G2"]).to_frame()
        assert frame.loc["TF1", "G1"] == 0.5
        assert list(frame.columns) == ["G1", "G2"]

    def test_count_flag(self):
        """Test counting cells carrying a flag."""
        flags = np.array([[EvidenceFlag.MOTIF, EvidenceFlag.MOTIF | EvidenceFlag.THRESHOLDED, 0]], dtype=int)
        regnet = RegNet(np.zeros((1, 3)), pd.Index(["TF1"]), pd.Index(["A", "B", "C"]), flags)
        assert regnet.count_flag(EvidenceFlag.MOTIF) == 2
        assert regnet.count_flag(EvidenceFlag.THRESHOLDED) == 1
        assert regnet.count_flag(EvidenceFlag.COEXPRESSION) == 0


class TestPriorParameters:
    """Test parameter validation."""

    def test_defaults_are_valid(self):
        params = PriorParameters()
        assert params.add_corr == 0
        assert params.motif_weight == 0.0

    @pytest.mark.parametrize("field,value", [
        ("motif_weight", 1.5),
        ("motif_cutoff", -0.1),
        ("thresh", 2.0),
        ("add_corr", 5),
        ("add_chip", 3),
        ("bridging_proteins", 8),
        ("ctrl", 4),
        ("qpval", 2),
    ])
    def test_out_of_range(self, field, value):
        """Test out-of-range values are rejected on construction."""
        with pytest.raises(ValueError, match=field):
            PriorParameters(**{field: value})

    @pytest.mark.parametrize("field", ["motif_weight", "motif_cutoff", "thresh"])
    def test_string_value_is_value_error(self, field):
        """Test a quoted number is rejected with ValueError, not TypeError."""
        with pytest.raises(ValueError, match="must be a number"):
            PriorParameters(**{field: "0.5"})

    def test_from_mapping_ignores_unknown_keys(self):
        """Test extra keys (e.g. CLI plumbing) are ignored."""
        params = PriorParameters.from_mapping({"add_corr": 2, "func": print, "order": "tf"})
        assert params.add_corr == 2

    def test_frozen(self):
        params = PriorParameters()
        with pytest.raises(Exception):
            params.add_corr = 1


class TestTransform:
    """Test the transform base class behaviour."""

    def test_identity_returns_new_instance(self):
        regnet = make_regnet([[0.5]], ["TF1"], ["G1"])
        result = Identity()(regnet)
        assert result is not regnet
        np.testing.assert_array_equal(result.data, regnet.data)

    def test_identity_does_not_share_memory(self):
        """Test writes to the result never reach the input matrix."""
        regnet = make_regnet([[0.5, 0.0]], ["TF1"], ["G1", "G2"])
        result = Identity()(regnet)
        assert not np.shares_memory(result.data, regnet.data)
        result.data[0, 0] = 1.0
        assert regnet.data[0, 0] == 0.5

    def test_repr_lists_params(self):
        assert repr(Identity(reason="off")) == "Identity(reason=off)"


class TestExceptions:
    """Test the exception hierarchy."""

    def test_malformed_input_is_value_error(self):
        """Test MalformedInputError can be caught as ValueError or the package base."""
        assert issubclass(MalformedInputError, ValueError)
        assert issubclass(MalformedInputError, MotifPriorError)
