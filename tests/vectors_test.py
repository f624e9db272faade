# Copyright 2025 Google LLC.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.


"""Tests for vectors module."""

import math

from absl.testing import absltest
from absl.testing import parameterized
import numpy as np
from scipy import sparse

from hyperdim.core import errors
from hyperdim.core import vectors

N = 1000


class BitVectorTest(absltest.TestCase):

  def test_binary(self):
    v = vectors.hdv(N)
    self.assertEqual(v.kind, vectors.VectorKind.BINARY)
    self.assertLen(v, N)
    self.assertLess(v.sum(), N)
    self.assertEqual(v.dtype, np.dtype(bool))
    self.assertTrue(all(isinstance(e, bool) for e in (v[0], v[1], v[-1])))

  def test_binhdv_is_binary(self):
    self.assertEqual(vectors.binhdv(N).kind, vectors.VectorKind.BINARY)

  def test_binary_sum_is_popcount(self):
    v = vectors.binhdv(N)
    self.assertEqual(v.sum(), int(v.to_array().sum()))

  def test_bipolar(self):
    v = vectors.bphdv(N)
    self.assertEqual(v.kind, vectors.VectorKind.BIPOLAR)
    self.assertTrue(np.issubdtype(v.dtype, np.integer))
    self.assertTrue(all(e in (-1, 1) for e in v))
    self.assertBetween(v.sum(), -N / 2, N / 2)

  def test_bipolar_sum_formula(self):
    """Test that the bipolar sum equals 2 * popcount - N."""
    v = vectors.bphdv(N)
    self.assertEqual(v.sum(), 2 * v.data.popcount() - N)
    self.assertEqual(v.sum(), int(v.to_array().astype(np.int64).sum()))

  def test_bipolar_index_maps_bits(self):
    v = vectors.from_values(vectors.VectorKind.BIPOLAR, [1, -1, -1, 1])
    self.assertEqual([v[i] for i in range(4)], [1, -1, -1, 1])

  def test_bit_norms(self):
    v = vectors.bphdv(N)
    self.assertAlmostEqual(v.norm(), math.sqrt(N))
    b = vectors.from_values(vectors.VectorKind.BINARY, [1, 0, 1, 1])
    self.assertAlmostEqual(b.norm(), math.sqrt(3))

  def test_reproducible_with_rng(self):
    v1 = vectors.binhdv(N, rng=np.random.default_rng(seed=42))
    v2 = vectors.binhdv(N, rng=np.random.default_rng(seed=42))
    self.assertEqual(v1, v2)

  def test_default_dimension(self):
    self.assertLen(vectors.hdv(), 10000)


class SparseVectorTest(absltest.TestCase):

  def test_sparse_bool(self):
    v = vectors.sphdv(p=0.2)
    self.assertEqual(v.kind, vectors.VectorKind.SPARSE)
    self.assertTrue(sparse.issparse(v.data))
    self.assertEqual(v.dtype, np.dtype(bool))
    self.assertTrue(np.issubdtype(np.asarray(v.sum()).dtype, np.integer))
    self.assertEqual(v.p, 0.2)

  def test_sparse_density(self):
    v = vectors.sphdv(10000, p=0.1, rng=np.random.default_rng(seed=3))
    self.assertBetween(v.data.nnz / 10000, 0.08, 0.12)

  def test_sparse_float(self):
    v = vectors.sphdv(N, np.float64, p=0.3)
    self.assertEqual(v.dtype, np.dtype(np.float64))
    values = v.to_array()
    self.assertTrue(np.all((values >= 0) & (values < 1)))

  def test_sparse_int(self):
    v = vectors.sphdv(N, np.int32, p=0.3)
    self.assertEqual(v.dtype, np.dtype(np.int32))
    self.assertTrue(np.all(v.data.data > 0))

  def test_sparse_getitem(self):
    v = vectors.from_values(vectors.VectorKind.SPARSE, [0, 0, 3, 0])
    self.assertEqual(v[2], 3)
    self.assertEqual(v[-1], 0)
    with self.assertRaises(IndexError):
      v[4]

  def test_sparse_from_matrix(self):
    matrix = sparse.csr_matrix(np.array([[0.0, 2.0, 0.0, 0.0]]))
    v = vectors.from_values(vectors.VectorKind.SPARSE, matrix)
    self.assertLen(v, 4)
    self.assertAlmostEqual(v.p, 0.25)
    self.assertAlmostEqual(v.norm(), 2.0)

  def test_invalid_density(self):
    with self.assertRaises(errors.InvalidRangeError):
      vectors.sphdv(N, p=1.5)

  def test_invalid_dtype(self):
    with self.assertRaises(errors.InvalidArgumentError):
      vectors.sphdv(N, np.complex128)


class DenseVectorTest(absltest.TestCase):

  def test_real(self):
    v = vectors.realhdv(N)
    self.assertEqual(v.dtype, np.dtype(np.float64))
    self.assertBetween(v.sum(), -N / 2, N / 2)
    self.assertGreater(v.norm(), 0)
    self.assertEqual(v.n, 1)

  def test_real_float32(self):
    self.assertEqual(vectors.realhdv(N, np.float32).dtype, np.dtype(np.float32))

  def test_real_rejects_integer_dtype(self):
    with self.assertRaises(errors.InvalidArgumentError):
      vectors.realhdv(N, np.int64)

  def test_int_from_values(self):
    v = vectors.from_values(vectors.VectorKind.INT, [1, -2, 3], n=2)
    self.assertTrue(np.issubdtype(v.dtype, np.integer))
    self.assertEqual(v.sum(), 2)
    self.assertEqual(v.n, 2)

  def test_int_rejects_fractions(self):
    with self.assertRaises(errors.InvalidRangeError):
      vectors.from_values(vectors.VectorKind.INT, [1.5, 2.0])

  def test_graded(self):
    v = vectors.gradhdv(N)
    self.assertEqual(v.dtype, np.dtype(np.float64))
    self.assertTrue(all(0 <= e <= 1 for e in v))

  def test_graded_bounds(self):
    v = vectors.gradhdv(N, l=0.2, u=0.4)
    self.assertTrue(np.all((v.to_array() >= 0.2) & (v.to_array() <= 0.4)))
    self.assertEqual(v.bounds, (0.2, 0.4))

  def test_graded_bipolar(self):
    v = vectors.gradbphdv(N)
    self.assertEqual(v.dtype, np.dtype(np.float64))
    self.assertTrue(all(-1 <= e <= 1 for e in v))
    self.assertTrue(np.all((v.data >= 0) & (v.data <= 1)))

  def test_graded_bipolar_bounds(self):
    v = vectors.gradbphdv(N, l=-0.5, u=0.25)
    values = v.to_array()
    self.assertTrue(np.all((values >= -0.5 - 1e-12) & (values <= 0.25 + 1e-12)))

  def test_graded_bipolar_index_remaps(self):
    v = vectors.from_values(vectors.VectorKind.GRADED_BIPOLAR, [-1.0, 0.5, 1.0])
    self.assertEqual(v[0], -1.0)
    self.assertEqual(v[1], 0.5)
    self.assertEqual(v.data[1], 0.75)
    self.assertAlmostEqual(v.sum(), 0.5)


class InvalidRangeTest(parameterized.TestCase):

  @parameterized.named_parameters(
      dict(testcase_name="equal", l=0.3, u=0.3),
      dict(testcase_name="reversed", l=0.6, u=0.4),
      dict(testcase_name="below_zero", l=-0.1, u=0.5),
      dict(testcase_name="above_one", l=0.5, u=1.1),
  )
  def test_gradhdv_bounds(self, l, u):
    with self.assertRaises(errors.InvalidRangeError) as ctx:
      vectors.gradhdv(N, l=l, u=u)
    self.assertIn("0 <= l < u <= 1", str(ctx.exception))

  @parameterized.named_parameters(
      dict(testcase_name="positive_lower", l=0.1, u=0.5),
      dict(testcase_name="negative_upper", l=-0.5, u=-0.1),
      dict(testcase_name="below_minus_one", l=-1.5, u=0.5),
  )
  def test_gradbphdv_bounds(self, l, u):
    with self.assertRaises(errors.InvalidRangeError):
      vectors.gradbphdv(N, l=l, u=u)

  def test_invalid_range_is_value_error(self):
    with self.assertRaises(ValueError):
      vectors.gradhdv(N, l=0.3, u=0.3)

  @parameterized.named_parameters(
      dict(testcase_name="binary", kind=vectors.VectorKind.BINARY,
           values=[0, 2]),
      dict(testcase_name="bipolar", kind=vectors.VectorKind.BIPOLAR,
           values=[1, 0]),
      dict(testcase_name="graded", kind=vectors.VectorKind.GRADED,
           values=[0.5, 1.5]),
      dict(testcase_name="graded_bipolar",
           kind=vectors.VectorKind.GRADED_BIPOLAR, values=[-2.0, 0.5]),
  )
  def test_from_values_out_of_domain(self, kind, values):
    with self.assertRaises(errors.InvalidRangeError):
      vectors.from_values(kind, values)

  def test_from_values_empty(self):
    with self.assertRaises(errors.InvalidArgumentError):
      vectors.from_values(vectors.VectorKind.REAL, [])

  def test_from_values_not_one_dimensional(self):
    with self.assertRaises(errors.InvalidArgumentError):
      vectors.from_values(vectors.VectorKind.REAL, [[1.0, 2.0]])

  def test_nonpositive_dimension(self):
    with self.assertRaises(errors.InvalidArgumentError):
      vectors.binhdv(0)


class ElementKindTest(parameterized.TestCase):

  @parameterized.parameters(
      (vectors.VectorKind.BINARY, vectors.ElementKind.BINARY),
      (vectors.VectorKind.BIPOLAR, vectors.ElementKind.NUMERIC),
      (vectors.VectorKind.SPARSE, vectors.ElementKind.NUMERIC),
      (vectors.VectorKind.REAL, vectors.ElementKind.NUMERIC),
      (vectors.VectorKind.INT, vectors.ElementKind.NUMERIC),
      (vectors.VectorKind.GRADED, vectors.ElementKind.GRADED),
      (vectors.VectorKind.GRADED_BIPOLAR, vectors.ElementKind.GRADED),
  )
  def test_element_kind(self, kind, expected):
    self.assertEqual(vectors.element_kind(kind), expected)

  def test_every_kind_is_classified(self):
    for kind in vectors.VectorKind:
      self.assertIsInstance(vectors.element_kind(kind), vectors.ElementKind)

  def test_instance_property(self):
    self.assertEqual(vectors.gradhdv(N).element_kind, vectors.ElementKind.GRADED)


class HyperVectorTest(absltest.TestCase):

  def test_equality_requires_same_kind(self):
    a = vectors.from_values(vectors.VectorKind.BINARY, [1, 0, 1])
    b = vectors.from_values(vectors.VectorKind.BIPOLAR, [1, -1, 1])
    self.assertNotEqual(a, b)
    self.assertEqual(a, vectors.from_values(vectors.VectorKind.BINARY,
                                            [True, False, True]))

  def test_copy_is_independent(self):
    v = vectors.realhdv(N)
    c = v.copy()
    c.data[0] += 1.0
    self.assertNotEqual(v, c)

  def test_repr(self):
    v = vectors.binhdv(100, label="apple")
    self.assertEqual(repr(v), "HyperVector(kind=binary, dim=100, label='apple')")

  def test_check_compatible_kind(self):
    with self.assertRaises(errors.DimensionMismatchError) as ctx:
      vectors.check_compatible((vectors.binhdv(N), vectors.bphdv(N)))
    self.assertIn("binary", str(ctx.exception))

  def test_check_compatible_dimension(self):
    with self.assertRaises(errors.DimensionMismatchError) as ctx:
      vectors.check_compatible((vectors.binhdv(100), vectors.binhdv(200)))
    self.assertIn("same dimension", str(ctx.exception))


if __name__ == "__main__":
  absltest.main()
