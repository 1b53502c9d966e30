import unittest
import numpy as np

from geneopt.core.params import ConfigurationError
from geneopt.core.fitness import sum_of_squares
from geneopt.algorithms.selection import binary_tournament, environmental_selection
from geneopt.algorithms.operators import crossover, mutation, random_individual


class TestBinaryTournament(unittest.TestCase):
    def setUp(self):
        self.rng = np.random.default_rng(42)
        self.population = [
            [1.0, 1.0],     # fitness = 2
            [2.0, 2.0],     # fitness = 8
            [3.0, 3.0],     # fitness = 18
            [4.0, 4.0],     # fitness = 32
        ]

    def test_returns_requested_parents(self):
        parents = binary_tournament(self.population, 4, rng=self.rng)

        self.assertEqual(len(parents), 4)

        # Cached fitness matches the individual
        for fitness, parent in parents:
            self.assertEqual(fitness, sum_of_squares(parent))

    def test_odd_count_rounded_down(self):
        parents = binary_tournament(self.population, 3, rng=self.rng)
        self.assertEqual(len(parents), 2)

    def test_one_parent_becomes_two(self):
        parents = binary_tournament(self.population, 1, rng=self.rng)
        self.assertEqual(len(parents), 2)

    def test_capped_to_population_size(self):
        population = self.population + [[5.0, 5.0]]
        with self.assertLogs("geneopt.algorithms.selection", level="WARNING"):
            parents = binary_tournament(population, 10, rng=self.rng)
        self.assertEqual(len(parents), 4)

    def test_worst_individual_never_selected(self):
        # The worst individual loses every tournament it takes part in
        for _ in range(50):
            parents = binary_tournament(self.population, 4, rng=self.rng)
            for fitness, _ in parents:
                self.assertLess(fitness, 32.0)

    def test_winner_not_worse_than_pair(self):
        # With two individuals every tournament compares both
        population = [[3.0], [1.0]]
        parents = binary_tournament(population, 2, rng=self.rng)
        for fitness, parent in parents:
            self.assertEqual(fitness, 1.0)
            np.testing.assert_array_equal(parent, [1.0])

    def test_invalid_num_parents(self):
        with self.assertRaises(ConfigurationError):
            binary_tournament([[1.0, 2.0], [3.0, 4.0]], 0)

    def test_empty_population(self):
        with self.assertRaises(ConfigurationError):
            binary_tournament([], 2)

    def test_custom_fitness(self):
        # Maximize the first gene by minimizing its negation
        parents = binary_tournament([[0.0], [9.0]], 2, evaluate=lambda v: -v[0], rng=self.rng)
        for fitness, parent in parents:
            self.assertEqual(fitness, -9.0)


class TestEnvironmentalSelection(unittest.TestCase):
    def test_keeps_best_half(self):
        population = [[1.0, 1.0], [2.0, 2.0], [3.0, 3.0], [4.0, 4.0]]

        selected = environmental_selection(0.5, population)

        self.assertEqual([fitness for fitness, _ in selected], [2.0, 8.0])
        np.testing.assert_array_equal(selected[0][1], [1.0, 1.0])
        np.testing.assert_array_equal(selected[1][1], [2.0, 2.0])

    def test_unsorted_input(self):
        population = [
            [3.0, 4.0],     # fitness = 25
            [1.0, 1.0],     # fitness = 2
            [2.0, 2.0],     # fitness = 8
            [5.0, 5.0],     # fitness = 50
        ]
        selected = environmental_selection(0.5, population)
        self.assertEqual([fitness for fitness, _ in selected], [2.0, 8.0])

    def test_full_ratio_orders_all(self):
        rng = np.random.default_rng(7)
        candidates = [rng.uniform(-5, 5, size=3) for _ in range(10)]

        selected = environmental_selection(1.0, candidates)

        self.assertLessEqual(len(selected), len(candidates))
        fitnesses = [fitness for fitness, _ in selected]
        self.assertEqual(fitnesses, sorted(fitnesses))

    def test_survivors_not_worse_than_discarded(self):
        rng = np.random.default_rng(3)
        candidates = [rng.uniform(-5, 5, size=4) for _ in range(9)]

        selected = environmental_selection(0.3, candidates)

        kept = [fitness for fitness, _ in selected]
        all_fitness = sorted(sum_of_squares(c) for c in candidates)
        discarded = all_fitness[len(kept):]
        self.assertLessEqual(max(kept), min(discarded))

    def test_ties_preserved(self):
        population = [[1.0], [-1.0], [1.0], [2.0]]
        selected = environmental_selection(0.75, population)
        self.assertEqual(len(selected), 3)
        self.assertEqual([fitness for fitness, _ in selected], [1.0, 1.0, 1.0])

    def test_ties_deduplicated(self):
        population = [[1.0], [-1.0], [1.0], [2.0]]
        selected = environmental_selection(1.0, population, deduplicate=True)
        self.assertEqual([fitness for fitness, _ in selected], [1.0, 4.0])
        # The first of the tied candidates is kept
        np.testing.assert_array_equal(selected[0][1], [1.0])

    def test_rounds_half_up(self):
        population = [[1.0], [2.0], [3.0], [4.0], [5.0]]
        # 5 * 0.5 = 2.5 keeps three
        self.assertEqual(len(environmental_selection(0.5, population)), 3)

    def test_invalid_ratio(self):
        with self.assertRaises(ConfigurationError):
            environmental_selection(1.5, [[1.0, 2.0]])
        with self.assertRaises(ConfigurationError):
            environmental_selection(-0.1, [[1.0, 2.0]])


class TestCrossover(unittest.TestCase):
    def setUp(self):
        self.rng = np.random.default_rng(42)
        self.parents = [
            (4.0, np.array([1.0, 1.0, 1.0, 1.0])),
            (16.0, np.array([2.0, 2.0, 2.0, 2.0])),
            (36.0, np.array([3.0, 3.0, 3.0, 3.0])),
            (64.0, np.array([4.0, 4.0, 4.0, 4.0])),
        ]

    def test_offspring_count_and_length(self):
        offspring = crossover(self.parents, 2, rng=self.rng)

        self.assertEqual(len(offspring), len(self.parents))
        for child in offspring:
            self.assertEqual(len(child), 4)

    def test_children_only_use_pair_values(self):
        offspring = crossover(self.parents[:2], 2, rng=self.rng)

        self.assertEqual(len(offspring), 2)
        for child in offspring:
            self.assertTrue(set(child.tolist()) <= {1.0, 2.0})

    def test_gene_multiset_preserved(self):
        a = np.arange(8, dtype=float)
        b = np.arange(8, 16, dtype=float)
        for k in range(8):
            child1, child2 = crossover([(0.0, a), (0.0, b)], k, rng=self.rng)
            # Every position holds the pair's two values in some order
            for i in range(8):
                self.assertEqual(sorted([child1[i], child2[i]]), [a[i], b[i]])

    def test_single_crosspoint_swaps_tail(self):
        a = np.zeros(5)
        b = np.ones(5)
        child1, child2 = crossover([(0.0, a), (5.0, b)], 1, rng=self.rng)

        # The head before the cut stays, everything after it is exchanged
        cut = int(np.argmax(child1 != 0.0))
        self.assertGreaterEqual(cut, 1)
        np.testing.assert_array_equal(child1, np.r_[np.zeros(cut), np.ones(5 - cut)])
        np.testing.assert_array_equal(child2, 1.0 - child1)

    def test_zero_crosspoints_copies_parents(self):
        offspring = crossover(self.parents[:2], 0, rng=self.rng)
        np.testing.assert_array_equal(offspring[0], self.parents[0][1])
        np.testing.assert_array_equal(offspring[1], self.parents[1][1])

    def test_parents_not_modified(self):
        crossover(self.parents, 3, rng=self.rng)
        np.testing.assert_array_equal(self.parents[0][1], [1.0, 1.0, 1.0, 1.0])
        np.testing.assert_array_equal(self.parents[1][1], [2.0, 2.0, 2.0, 2.0])

    def test_odd_parents(self):
        with self.assertRaises(ConfigurationError):
            crossover(self.parents[:3], 2)

    def test_empty_parents(self):
        with self.assertRaises(ConfigurationError):
            crossover([], 2)

    def test_too_many_crosspoints(self):
        with self.assertRaises(ConfigurationError):
            crossover(self.parents, 4)

    def test_mismatched_lengths(self):
        parents = [(0.0, np.zeros(4)), (0.0, np.zeros(3))]
        with self.assertRaises(ConfigurationError):
            crossover(parents, 1)


class TestMutation(unittest.TestCase):
    def setUp(self):
        self.rng = np.random.default_rng(42)
        self.offspring = [
            np.array([1.0, 1.0, 1.0, 1.0]),
            np.array([2.0, 2.0, 2.0, 2.0]),
        ]

    def test_zero_rate_is_identity(self):
        mutated = mutation(0.0, 0.0, 10.0, self.offspring, rng=self.rng)
        for before, after in zip(self.offspring, mutated):
            np.testing.assert_array_equal(after, before)

    def test_full_rate_changes_every_gene(self):
        mutated = mutation(1.0, 0.0, 10.0, self.offspring, rng=self.rng)
        for before, after in zip(self.offspring, mutated):
            self.assertTrue(np.all(after != before))

    def test_values_within_bounds(self):
        mutated = mutation(1.0, -3.0, 3.0, self.offspring, rng=self.rng)
        for child in mutated:
            self.assertTrue(np.all((child >= -3.0) & (child <= 3.0)))

    def test_input_not_modified(self):
        mutation(1.0, 0.0, 10.0, self.offspring, rng=self.rng)
        np.testing.assert_array_equal(self.offspring[0], [1.0, 1.0, 1.0, 1.0])

    def test_preserves_order_and_lengths(self):
        offspring = [np.zeros(3), np.zeros(5)]
        mutated = mutation(0.5, 0.0, 1.0, offspring, rng=self.rng)
        self.assertEqual([len(c) for c in mutated], [3, 5])

    def test_invalid_rate(self):
        with self.assertRaises(ConfigurationError):
            mutation(1.5, 0.0, 10.0, [[1.0, 1.0]])


class TestRandomIndividual(unittest.TestCase):
    def test_shape_and_bounds(self):
        individual = random_individual(6, -1.0, 1.0, np.random.default_rng(0))
        self.assertEqual(individual.shape, (6,))
        self.assertTrue(np.all((individual >= -1.0) & (individual <= 1.0)))


if __name__ == '__main__':
    unittest.main()
