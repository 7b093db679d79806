import unittest
from itertools import product
import numpy as np

from realeigen import RealEigen
from realeigen.typing import EigenDecomposition, NonConvergenceError
from utils import backends, rand_data, rand_symmetric, to_numpy, reconstruction_error

class TestEigenDecomposition(unittest.TestCase):

    def setUp(self):
        self.realeigen = [RealEigen(backend) for backend in backends]
        self.sizes = [1, 2, 3, 7, 20]

    def mixed_matrix(self) -> np.ndarray:
        # eigenvalues 2 and 1 +- 3i
        block = np.asarray([[2.0, 0.0, 0.0], [0.0, 1.0, -3.0], [0.0, 3.0, 1.0]])
        basis = np.asarray([[1.0, 1.0, 0.0], [0.0, 1.0, 1.0], [1.0, 0.0, 1.0]])
        return basis @ block @ np.linalg.inv(basis)

    def check_pairs(self, decomp: EigenDecomposition) -> None:
        n = decomp.order
        for i in range(n):
            if decomp.imag_eigenvalue(i) > 0:
                self.assertEqual(decomp.imag_eigenvalue(i+1), -decomp.imag_eigenvalue(i))
                self.assertEqual(decomp.real_eigenvalue(i+1), decomp.real_eigenvalue(i))

    def check_normalization(self, decomp: EigenDecomposition) -> None:
        v = to_numpy(decomp.get_v())
        e = to_numpy(decomp.imag_eigenvalues())
        i = 0
        while i < decomp.order:
            cols = v[:,i:i+1] if e[i] == 0.0 else v[:,i:i+2]
            self.assertAlmostEqual(float(np.sum(cols * cols)), 1.0, places=12)
            i += cols.shape[1]

    def test_identity(self):
        for ts in self.realeigen:
            xp = ts.namespace
            decomp = ts.decompose(xp.eye(3, dtype=xp.float64))
            self.assertTrue(decomp.symmetric)
            self.assertTrue(np.all(to_numpy(decomp.real_eigenvalues()) == 1.0))
            self.assertTrue(np.all(to_numpy(decomp.imag_eigenvalues()) == 0.0))
            self.assertTrue(np.all(np.abs(to_numpy(decomp.get_v())) == np.eye(3)))

    def test_diagonal(self):
        for ts in self.realeigen:
            decomp = ts.decompose([[3.0, 0.0, 0.0], [0.0, 1.0, 0.0], [0.0, 0.0, 2.0]])
            self.assertTrue(np.all(to_numpy(decomp.real_eigenvalues()) == np.asarray([3.0, 2.0, 1.0])))
            perm = np.asarray([[1.0, 0.0, 0.0], [0.0, 0.0, 1.0], [0.0, 1.0, 0.0]])
            self.assertTrue(np.all(np.abs(to_numpy(decomp.get_v())) == perm))

    def test_rotation_generator(self):
        for ts in self.realeigen:
            mat = [[0.0, -1.0], [1.0, 0.0]]
            decomp = ts.decompose(mat)
            self.assertFalse(decomp.symmetric)
            self.assertTrue(np.max(np.abs(to_numpy(decomp.real_eigenvalues()))) < 1e-14)
            self.assertTrue(np.max(np.abs(to_numpy(decomp.imag_eigenvalues()) - np.asarray([1.0, -1.0]))) < 1e-14)
            self.assertTrue(reconstruction_error(np.asarray(mat), decomp.get_v(), decomp.get_d()) < 1e-14)
            self.check_normalization(decomp)

            d = to_numpy(decomp.get_d())
            self.assertTrue(np.max(np.abs(d - np.asarray([[0.0, 1.0], [-1.0, 0.0]]))) < 1e-14)

    def test_symmetric_2x2(self):
        for ts in self.realeigen:
            decomp = ts.decompose([[2.0, 1.0], [1.0, 2.0]])
            vals = to_numpy(decomp.real_eigenvalues())
            self.assertTrue(np.max(np.abs(vals - np.asarray([3.0, 1.0]))) < 1e-14)
            r2 = np.sqrt(0.5)
            v0 = to_numpy(decomp.real_eigenvector(0))
            v1 = to_numpy(decomp.real_eigenvector(1))
            self.assertTrue(np.max(np.abs(np.abs(v0) - r2)) < 1e-14)
            self.assertTrue(np.max(np.abs(np.abs(v1) - r2)) < 1e-14)
            self.assertTrue(v0[0] * v0[1] > 0)
            self.assertTrue(v1[0] * v1[1] < 0)

    def test_mixed_eigenvalues(self):
        for ts in self.realeigen:
            mat = self.mixed_matrix()
            decomp = ts.decompose(mat)
            self.assertFalse(decomp.symmetric)
            self.check_pairs(decomp)
            self.check_normalization(decomp)
            self.assertTrue(reconstruction_error(mat, decomp.get_v(), decomp.get_d()) < 1e-12)

            vals = to_numpy(decomp.real_eigenvalues()) + 1j*to_numpy(decomp.imag_eigenvalues())
            for ref in (2.0, 1.0+3.0j, 1.0-3.0j):
                self.assertTrue(np.min(np.abs(vals - ref)) < 1e-12)
            self.assertEqual(int(np.sum(to_numpy(decomp.imag_eigenvalues()) == 0.0)), 1)

    def test_symmetric(self):
        for (xp, ts), n in product(zip(backends, self.realeigen), self.sizes):
            mat = rand_symmetric(xp, n, seed=n)
            decomp = ts.decompose(mat)
            self.assertTrue(decomp.symmetric)

            v = to_numpy(decomp.get_v())
            vals = to_numpy(decomp.real_eigenvalues())
            self.assertTrue(np.max(np.abs(v.T @ v - np.eye(n))) < 1e-12)
            self.assertTrue(np.all(vals[:-1] >= vals[1:]))
            self.assertTrue(np.all(to_numpy(decomp.imag_eigenvalues()) == 0.0))
            self.assertTrue(reconstruction_error(mat, decomp.get_v(), decomp.get_d()) < 1e-12 * n)

    def test_general(self):
        for (xp, ts), n in product(zip(backends, self.realeigen), self.sizes):
            mat = rand_data(xp, n, n, seed=n)
            decomp = ts.decompose(mat)
            self.check_pairs(decomp)
            self.check_normalization(decomp)
            self.assertTrue(reconstruction_error(mat, decomp.get_v(), decomp.get_d()) < 1e-11 * n)

            vals = to_numpy(decomp.real_eigenvalues()) + 1j*to_numpy(decomp.imag_eigenvalues())
            ref = np.linalg.eigvals(to_numpy(mat))
            self.assertTrue(np.max(np.abs(np.sort_complex(vals) - np.sort_complex(ref))) < 1e-10)

    def test_exceptional_shift(self):
        # x^4 + 1
        companion = np.asarray([[0.0, 0.0, 0.0, -1.0],
                                [1.0, 0.0, 0.0, 0.0],
                                [0.0, 1.0, 0.0, 0.0],
                                [0.0, 0.0, 1.0, 0.0]])
        mats = [np.roll(np.eye(n), 1, axis=0) for n in (3, 4, 6)] + [companion]
        for ts, mat in product(self.realeigen, mats):
            with self.assertLogs("realeigen.schur", "DEBUG") as logs:
                decomp = ts.decompose(mat)
            self.assertTrue(any("Exceptional shift" in msg for msg in logs.output))

            self.assertFalse(decomp.symmetric)
            self.check_pairs(decomp)
            self.check_normalization(decomp)
            self.assertTrue(reconstruction_error(mat, decomp.get_v(), decomp.get_d()) < 1e-12)
            vals = to_numpy(decomp.real_eigenvalues()) + 1j*to_numpy(decomp.imag_eigenvalues())
            for ref in np.linalg.eigvals(mat):
                self.assertTrue(np.min(np.abs(vals - ref)) < 1e-12)

            with ts.options(max_iterations=10):
                self.assertRaises(NonConvergenceError, ts.decompose, mat)

    def test_repeated_complex_pair(self):
        rot = np.asarray([[0.0, -1.0], [1.0, 0.0]])
        mat = np.block([[rot, np.eye(2)], [np.zeros((2, 2)), rot]])
        q, _ = np.linalg.qr(np.random.default_rng(11).uniform(-1.0, 1.0, (4, 4)))
        for ts, m in product(self.realeigen, (mat, q @ mat @ q.T)):
            decomp = ts.decompose(m)
            self.assertFalse(decomp.symmetric)
            self.assertTrue(np.all(np.isfinite(to_numpy(decomp.get_v()))))
            self.check_pairs(decomp)
            self.check_normalization(decomp)
            self.assertTrue(reconstruction_error(m, decomp.get_v(), decomp.get_d()) < 1e-12)

            imag = to_numpy(decomp.imag_eigenvalues())
            self.assertTrue(np.max(np.abs(to_numpy(decomp.real_eigenvalues()))) < 1e-6)
            self.assertTrue(np.max(np.abs(np.abs(imag) - 1.0)) < 1e-6)

    def test_zero_matrix(self):
        for ts in self.realeigen:
            decomp = ts.decompose(np.zeros((3, 3)))
            self.assertTrue(np.all(to_numpy(decomp.real_eigenvalues()) == 0.0))
            v = to_numpy(decomp.get_v())
            self.assertTrue(np.max(np.abs(v.T @ v - np.eye(3))) < 1e-14)

            upper = np.triu(np.ones((3, 3)), 1)
            decomp = ts.decompose(upper)
            self.assertFalse(decomp.symmetric)
            self.assertTrue(np.all(to_numpy(decomp.real_eigenvalues()) == 0.0))
            self.assertTrue(reconstruction_error(upper, decomp.get_v(), decomp.get_d()) < 1e-12)

    def test_flat(self):
        for ts in self.realeigen:
            mat = self.mixed_matrix()
            ref = ts.decompose(mat)
            row_major = ts.decompose_flat(list(mat.flatten()), 3)
            col_major = ts.decompose_flat(mat.T.flatten(), 3, column_major_order=True)
            longer = ts.decompose_flat(list(mat.flatten()) + [5.0], 3, strict=False)
            for decomp in (row_major, col_major, longer):
                self.assertTrue(np.all(to_numpy(decomp.real_eigenvalues()) == to_numpy(ref.real_eigenvalues())))
                self.assertTrue(np.all(to_numpy(decomp.get_v()) == to_numpy(ref.get_v())))

    def test_explicit_order(self):
        for ts in self.realeigen:
            mat = [[2.0, 1.0, 7.0], [1.0, 2.0, 7.0], [7.0, 7.0, 7.0]]
            decomp = ts.decompose(mat, 2, strict=False)
            self.assertEqual(decomp.number_of_rows(), 2)
            self.assertEqual(decomp.number_of_columns(), 2)
            vals = to_numpy(decomp.real_eigenvalues())
            self.assertTrue(np.max(np.abs(vals - np.asarray([3.0, 1.0]))) < 1e-14)
            self.assertRaises(ValueError, ts.decompose, mat, 2, True)

    def test_invalid(self):
        for ts in self.realeigen:
            self.assertRaises(ValueError, ts.decompose, None)
            self.assertRaises(ValueError, ts.decompose, [])
            self.assertRaises(ValueError, ts.decompose, [[1.0, 2.0], [3.0]])
            self.assertRaises(ValueError, ts.decompose, [[1.0, 2.0], [3.0, 4.0]], 0)
            self.assertRaises(ValueError, ts.decompose, [[1.0, 2.0], [3.0, 4.0]], -1)
            self.assertRaises(ValueError, ts.decompose_flat, [1.0, 2.0, 3.0], 2)
            self.assertRaises(ValueError, ts.decompose_flat, [1.0, 2.0, 3.0, 4.0], 0)

    def test_accessors(self):
        for ts in self.realeigen:
            mat = self.mixed_matrix()
            decomp = ts.decompose(mat)
            n = decomp.order
            v = to_numpy(decomp.get_v())
            e = to_numpy(decomp.imag_eigenvalues())

            self.assertTrue(np.all(to_numpy(decomp.get_vt()) == v.T))
            for k in range(n):
                self.assertTrue(np.all(to_numpy(decomp.real_eigenvector(k)) == v[:,k]))
                imag = to_numpy(decomp.imag_eigenvector(k))
                if e[k] == 0.0:
                    self.assertTrue(np.all(imag == 0.0))
                elif e[k] > 0.0:
                    self.assertTrue(np.all(imag == v[:,k+1]))
                else:
                    self.assertTrue(np.all(imag == v[:,k-1]))

            for func in (decomp.real_eigenvalue, decomp.imag_eigenvalue,
                         decomp.real_eigenvector, decomp.imag_eigenvector):
                self.assertRaises(ValueError, func, -1)
                self.assertRaises(ValueError, func, n)

    def test_copies(self):
        for ts in self.realeigen:
            mat = self.mixed_matrix()
            ref = mat.copy()
            decomp = ts.decompose(mat)
            self.assertTrue(np.all(mat == ref))

            vals = decomp.real_eigenvalues()
            vals[0] = 100.0
            v = decomp.get_v()
            v[0,0] = 100.0
            vec = decomp.real_eigenvector(0)
            vec[0] = 100.0
            self.assertNotEqual(decomp.real_eigenvalue(0), 100.0)
            self.assertNotEqual(float(decomp.get_v()[0,0]), 100.0)
            self.assertRaises(AttributeError, setattr, decomp, "order", 5)

if __name__ == '__main__':
    unittest.main()
