"""
End-to-end tests for create_ppi_motif_prior.

Runs the full load -> threshold -> ChIP overlay -> fusion -> write pipeline
on temporary input files.
"""

import numpy as np
import pytest

from motifprior import PriorParameters, create_ppi_motif_prior
from motifprior.core.exceptions import EmptyIntersectionError
from motifprior.io.formats import MotifFile
from motifprior.io.loaders import load_edge_list, load_expression
from motifprior.prior.coexpression import CoexpressionFusion
from motifprior.utils.correlation_matrix import compute_coexpression

from conftest import write_rows


class TestExampleScenario:
    """Three genes, two TFs named like genes, one motif edge."""

    def test_motif_only(self, example_inputs):
        result = create_ppi_motif_prior(
            example_inputs['expression'],
            example_inputs['motif'],
            example_inputs['ppi'],
            PriorParameters(),
            output_dir=example_inputs['dir'],
        )

        assert result.regnet.shape == (2, 3)
        np.testing.assert_array_equal(
            result.regnet.data, [[0.0, 0.5, 0.0], [0.0, 0.0, 0.0]]
        )
        assert result.filename == "expression_motif_MW0_MC0_AC0_ABS0_THR0_OM0_IC0_QP0_BR0_CHIP0_PE0.txt"
        assert result.path == example_inputs['dir'] / result.filename
        assert result.path.read_text().splitlines() == [
            "G1\tG1\t0.000000",
            "G1\tG2\t0.500000",
            "G1\tG3\t0.000000",
            "G2\tG1\t0.000000",
            "G2\tG2\t0.000000",
            "G2\tG3\t0.000000",
        ]

    def test_thresholding(self, example_inputs):
        """Test uncorrected p-values with full coverage are binarized."""
        params = PriorParameters(thresh=0.6, inc_coverage=1)
        result = create_ppi_motif_prior(
            example_inputs['expression'], example_inputs['motif'], example_inputs['ppi'],
            params, write=False,
        )
        assert result.regnet.data[0, 1] == 1.0
        assert result.regnet.n_edges == 1

    def test_corrected_pvalues_not_thresholded(self, example_inputs):
        params = PriorParameters(thresh=0.6, inc_coverage=1, qpval=1)
        result = create_ppi_motif_prior(
            example_inputs['expression'], example_inputs['motif'], example_inputs['ppi'],
            params, write=False,
        )
        assert result.regnet.data[0, 1] == 0.5

    def test_coexpression_fusion(self, example_inputs):
        """Test variant 1 fuses the hand-computed coexpression rows."""
        params = PriorParameters(add_corr=1, motif_weight=0.5)
        result = create_ppi_motif_prior(
            example_inputs['expression'], example_inputs['motif'], example_inputs['ppi'],
            params, write=False,
        )
        np.testing.assert_allclose(
            result.regnet.data, [[1 / 3, 0.75, 0.5], [0.5, 1 / 3, 0.5]]
        )
        assert [stage.name for stage in result.stages] == ["Identity", "CoexpressionFusion"]

    def test_write_false(self, example_inputs):
        result = create_ppi_motif_prior(
            example_inputs['expression'], example_inputs['motif'], example_inputs['ppi'],
            PriorParameters(), output_dir=example_inputs['dir'] / "out", write=False,
        )
        assert result.path is None
        assert not (example_inputs['dir'] / "out").exists()


class TestPipelineInvariants:
    """Shape, determinism and blend boundaries on synthetic inputs."""

    def test_shape_follows_ppi_and_expression(self, synthetic_inputs):
        params = PriorParameters(add_corr=2, motif_weight=0.4)
        result = create_ppi_motif_prior(
            synthetic_inputs['expression'], synthetic_inputs['motif'], synthetic_inputs['ppi'],
            params, output_dir=synthetic_inputs['dir'],
        )
        n_tfs = len(synthetic_inputs['tf_ids'])
        n_genes = len(synthetic_inputs['gene_ids'])
        assert result.regnet.shape == (n_tfs, n_genes)
        assert list(result.regnet.gene_ids) == synthetic_inputs['gene_ids']
        assert len(result.path.read_text().splitlines()) == n_tfs * n_genes

    def test_deterministic(self, synthetic_inputs, tmp_path):
        """Test identical inputs and parameters give identical bytes."""
        params = PriorParameters(add_corr=1, motif_weight=0.3, motif_cutoff=0.2, thresh=0.05, inc_coverage=1)
        first = create_ppi_motif_prior(
            synthetic_inputs['expression'], synthetic_inputs['motif'], synthetic_inputs['ppi'],
            params, output_dir=tmp_path / "first",
        )
        second = create_ppi_motif_prior(
            synthetic_inputs['expression'], synthetic_inputs['motif'], synthetic_inputs['ppi'],
            params, output_dir=tmp_path / "second",
        )
        assert first.filename == second.filename
        assert first.path.read_bytes() == second.path.read_bytes()

    def test_weight_zero_keeps_motif(self, synthetic_inputs):
        base = create_ppi_motif_prior(
            synthetic_inputs['expression'], synthetic_inputs['motif'], synthetic_inputs['ppi'],
            PriorParameters(), write=False,
        )
        fused = create_ppi_motif_prior(
            synthetic_inputs['expression'], synthetic_inputs['motif'], synthetic_inputs['ppi'],
            PriorParameters(add_corr=1, motif_weight=0.0), write=False,
        )
        np.testing.assert_array_equal(fused.regnet.data, base.regnet.data)

    def test_weight_one_is_coexpression(self, synthetic_inputs):
        result = create_ppi_motif_prior(
            synthetic_inputs['expression'], synthetic_inputs['motif'], synthetic_inputs['ppi'],
            PriorParameters(add_corr=2, motif_weight=1.0), write=False,
        )
        expression = load_expression(synthetic_inputs['expression'])
        stage = CoexpressionFusion(
            compute_coexpression(expression.data), motif_weight=1.0, motif_cutoff=0.0, zero_diagonal=False
        )
        np.testing.assert_allclose(result.regnet.data, stage.tf_coexpression(result.regnet))

    def test_orphan_tf_rows_have_no_coexpression(self, synthetic_inputs):
        """Test TFs that are not genes only get the imputed mean."""
        result = create_ppi_motif_prior(
            synthetic_inputs['expression'], synthetic_inputs['motif'], synthetic_inputs['ppi'],
            PriorParameters(add_corr=2, motif_weight=1.0), write=False,
        )
        row = result.regnet.data[result.regnet.tf_ids.get_loc("ORPHAN0")]
        assert np.unique(row).size == 1

    def test_written_file_reads_back(self, synthetic_inputs):
        result = create_ppi_motif_prior(
            synthetic_inputs['expression'], synthetic_inputs['motif'], synthetic_inputs['ppi'],
            PriorParameters(add_corr=1, motif_weight=0.5), output_dir=synthetic_inputs['dir'],
        )
        restored = load_edge_list(result.path)
        np.testing.assert_allclose(restored.data, result.regnet.data, atol=5e-7)
        assert restored.tf_ids.equals(result.regnet.tf_ids)


class TestPrebuiltReentry:
    """Test rebuilding from a previous result's motif matrix."""

    def test_prebuilt_matches_file(self, synthetic_inputs):
        params = PriorParameters(add_corr=1, motif_weight=0.2, thresh=0.1, inc_coverage=1)
        from_file = create_ppi_motif_prior(
            synthetic_inputs['expression'], MotifFile(synthetic_inputs['motif']),
            synthetic_inputs['ppi'], params, write=False,
        )
        reentered = create_ppi_motif_prior(
            synthetic_inputs['expression'], from_file.as_prebuilt(),
            synthetic_inputs['ppi'], params, write=False,
        )
        np.testing.assert_array_equal(reentered.regnet.data, from_file.regnet.data)
        assert reentered.filename == from_file.filename

    def test_prebuilt_is_not_thresholded_twice(self, synthetic_inputs):
        """Test the reusable motif matrix is the raw one, before thresholding."""
        params = PriorParameters(thresh=0.1, inc_coverage=1)
        result = create_ppi_motif_prior(
            synthetic_inputs['expression'], synthetic_inputs['motif'],
            synthetic_inputs['ppi'], params, write=False,
        )
        raw = result.motif_regnet.data
        assert np.any((raw > 0) & (raw < 1))


class TestChipInPipeline:
    """Test ChIP-seq overlay as a pipeline stage."""

    def test_mode_two(self, synthetic_inputs):
        result = create_ppi_motif_prior(
            synthetic_inputs['expression'], synthetic_inputs['motif'], synthetic_inputs['ppi'],
            PriorParameters(add_chip=2), chip_path=synthetic_inputs['chip'], write=False,
        )
        tf_ids = synthetic_inputs['tf_ids']
        gene_ids = synthetic_inputs['gene_ids']
        regnet = result.regnet

        row = regnet.data[regnet.tf_ids.get_loc(tf_ids[0])]
        expected = np.full(len(gene_ids), -1.0)
        expected[[1, 2]] = 1.0
        np.testing.assert_array_equal(row, expected)
        np.testing.assert_array_equal(
            regnet.data[regnet.tf_ids.get_loc(tf_ids[1])], np.full(len(gene_ids), -1.0)
        )

    def test_chip_before_fusion(self, synthetic_inputs):
        """Test fusion sees the overlaid rows."""
        params = PriorParameters(add_chip=1, add_corr=1, motif_weight=0.5)
        result = create_ppi_motif_prior(
            synthetic_inputs['expression'], synthetic_inputs['motif'], synthetic_inputs['ppi'],
            params, chip_path=synthetic_inputs['chip'], write=False,
        )
        assert [stage.name for stage in result.stages] == ["Identity", "ChipOverlay", "CoexpressionFusion"]

    def test_missing_chip_file(self, synthetic_inputs, tmp_path):
        with pytest.raises(FileNotFoundError):
            create_ppi_motif_prior(
                synthetic_inputs['expression'], synthetic_inputs['motif'], synthetic_inputs['ppi'],
                PriorParameters(add_chip=1), chip_path=tmp_path / "missing.txt", write=False,
            )

    def test_chip_file_not_read_when_disabled(self, synthetic_inputs, tmp_path):
        result = create_ppi_motif_prior(
            synthetic_inputs['expression'], synthetic_inputs['motif'], synthetic_inputs['ppi'],
            PriorParameters(add_chip=0), chip_path=tmp_path / "missing.txt", write=False,
        )
        assert result.regnet is not None


class TestEmptyMotifIntersection:
    """Test handling of motif files that share nothing with the inputs."""

    @pytest.fixture
    def unrelated_motif(self, example_inputs):
        return write_rows(example_inputs['dir'] / "unrelated.txt", [("TFX", "GX", 0.01)])

    def test_raises_by_default(self, example_inputs, unrelated_motif):
        with pytest.raises(EmptyIntersectionError):
            create_ppi_motif_prior(
                example_inputs['expression'], unrelated_motif, example_inputs['ppi'],
                PriorParameters(), write=False,
            )

    def test_allowed(self, example_inputs, unrelated_motif):
        result = create_ppi_motif_prior(
            example_inputs['expression'], unrelated_motif, example_inputs['ppi'],
            PriorParameters(), allow_empty_motif=True, write=False,
        )
        assert result.regnet.n_edges == 0
        assert result.filename.startswith("expression_unrelated_")


class TestNaLikeIdentifiers:
    """Test genes and TFs named like missing-value markers."""

    @pytest.fixture
    def na_inputs(self, tmp_path):
        return {
            'expression': write_rows(tmp_path / "expression.txt", [
                ("NA", 1.0, 2.0),
                ("None", 2.0, 4.0),
                ("G3", 3.0, 1.0),
            ]),
            'ppi': write_rows(tmp_path / "ppi.txt", [
                ("NA", "None", 1),
                ("null", "G3", 1),
            ]),
            'motif': write_rows(tmp_path / "motif.txt", [("NA", "None", 0.5)]),
            'dir': tmp_path,
        }

    def test_identifiers_survive_to_output(self, na_inputs):
        result = create_ppi_motif_prior(
            na_inputs['expression'], na_inputs['motif'], na_inputs['ppi'],
            PriorParameters(), output_dir=na_inputs['dir'],
        )

        assert result.regnet.shape == (2, 3)
        assert list(result.regnet.tf_ids) == ["NA", "null"]
        assert list(result.regnet.gene_ids) == ["NA", "None", "G3"]
        assert result.regnet.data[0, 1] == 0.5
        assert result.regnet.n_edges == 1

        text = result.path.read_text()
        assert "NA\tNone\t0.500000" in text.splitlines()
        assert "nan" not in text.lower()


class TestResultBuffers:
    """Test the final prior never aliases the reusable motif matrix."""

    def test_passthrough_does_not_share_memory(self, example_inputs):
        result = create_ppi_motif_prior(
            example_inputs['expression'], example_inputs['motif'], example_inputs['ppi'],
            PriorParameters(), write=False,
        )
        assert not np.shares_memory(result.regnet.data, result.motif_regnet.data)

        result.regnet.data[0, 1] = 9.0
        assert result.motif_regnet.data[0, 1] == 0.5
