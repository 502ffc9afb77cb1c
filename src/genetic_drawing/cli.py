"""Command-line interface for genetic_drawing."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from tqdm import tqdm

from genetic_drawing.core.dna import MutationPolicy
from genetic_drawing.core.phenotype import Phenotype
from genetic_drawing.evolution.config import EvolutionConfig
from genetic_drawing.evolution.fitness import FitnessMetric
from genetic_drawing.rendering.display import FRAME_MODES


def config_from_args(args: argparse.Namespace) -> EvolutionConfig:
    """Build and validate an EvolutionConfig from parsed arguments."""
    return EvolutionConfig(
        population_size=args.population_size,
        dna_length=args.dna_length,
        phenotype=args.phenotype,
        survival_rate=args.survival_rate,
        allow_self_pairing=args.allow_self_pairing,
        mutation_policy=args.mutation_policy,
        mutation_chance=args.mutation_chance,
        mutation_impact=args.mutation_impact,
        fitness_metric=args.fitness_metric,
        reduction_factor=args.reduction_factor,
        recessive_genes=not args.all_genes_active,
        frame_mode=args.frame_mode,
        log_interval=args.log_interval,
    ).validate()


def cmd_evolve(args: argparse.Namespace) -> int:
    """Evolve a drawing toward a target image."""
    from genetic_drawing.evolution.population import Population
    from genetic_drawing.rendering.display import compose_frame
    from genetic_drawing.rendering.image_source import load_target
    from genetic_drawing.utils.log import setup_logger
    from genetic_drawing.utils.run_manager import RunManager

    try:
        config = config_from_args(args)
        target = load_target(args.image, config.reduction_factor)
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    run_config = config.to_dict()
    run_config.update({
        "image": str(args.image),
        "generations": args.generations,
        "seed": args.seed,
        "canvas_size": list(args.canvas_size),
    })
    run = RunManager(args.output_dir).create_run(Path(args.image).stem, config=run_config)
    log = setup_logger(run.log_path, verbose=args.verbose)

    log.info(f"Run ID: {run.metadata.run_id}")
    log.info(f"Output: {run.run_dir}")
    log.info(
        f"Target {target.width}x{target.height}, population {config.population_size}, "
        f"{config.dna_length} {config.phenotype.value} genes"
    )

    population = Population(config, target, seed=args.seed)
    canvas_size = tuple(args.canvas_size)

    def save(name: str) -> None:
        frame = compose_frame(
            population.fittest,
            population.renderer,
            canvas_size,
            target=target,
            mode=config.frame_mode,
        )
        run.save_image(frame, name)

    status = "completed"
    try:
        for gen in tqdm(range(args.generations), desc="Evolving", disable=args.quiet):
            fittest = population.iterate()

            if (gen + 1) % config.log_interval == 0:
                log.debug(f"{gen + 1} {fittest.fitness:.6f}")

            if args.save_interval and (gen + 1) % args.save_interval == 0:
                save(f"gen_{gen + 1:05d}")
    except KeyboardInterrupt:
        status = "cancelled"
        log.warning(f"Interrupted after {population.generation} generations")

    save("final")

    summary = {
        "generations": population.generation,
        "best_fitness": population.fittest.fitness,
        "evaluations": population.evaluator.evaluations,
    }
    run.save_results({"summary": summary, "history": population.history})
    run.complete(status, summary)

    log.info(f"Best fitness after {population.generation} generations: {population.fittest.fitness:.6f}")
    log.info(f"Saved to {run.images_dir}")
    return 0


def cmd_phenotypes(args: argparse.Namespace) -> int:
    """List phenotypes and their gene lengths."""
    print(f"{'Phenotype':<10} {'Gene length':>11}")
    for phenotype in Phenotype:
        print(f"{phenotype.value:<10} {phenotype.gene_length:>11}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    defaults = EvolutionConfig()

    parser = argparse.ArgumentParser(
        prog="genetic-drawing",
        description="Approximate an image by evolving vector drawings",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    evolve = subparsers.add_parser("evolve", help="Evolve a drawing toward an image")
    evolve.add_argument("image", help="Target image file")
    evolve.add_argument("--generations", type=int, default=500, help="Number of generations")
    evolve.add_argument("--seed", type=int, default=None, help="Random seed")
    evolve.add_argument("--population-size", type=int, default=defaults.population_size, help="Individuals per generation")
    evolve.add_argument("--dna-length", type=int, default=defaults.dna_length, help="Genes per individual")
    evolve.add_argument("--phenotype", choices=[p.value for p in Phenotype], default=defaults.phenotype.value, help="Drawing style")
    evolve.add_argument("--survival-rate", type=float, default=defaults.survival_rate, help="Fraction of ranked individuals eligible as parents")
    evolve.add_argument("--allow-self-pairing", action="store_true", help="Let a single survivor pair with itself")
    evolve.add_argument("--mutation-policy", choices=[m.value for m in MutationPolicy], default=defaults.mutation_policy.value, help="Mutation policy")
    evolve.add_argument("--mutation-chance", type=float, default=defaults.mutation_chance, help="Per-value mutation probability")
    evolve.add_argument("--mutation-impact", type=float, default=defaults.mutation_impact, help="Maximum continuous perturbation")
    evolve.add_argument("--fitness-metric", choices=[m.value for m in FitnessMetric], default=defaults.fitness_metric.value, help="Pixel difference metric")
    evolve.add_argument("--reduction-factor", type=float, default=defaults.reduction_factor, help="Divide image dimensions by this factor")
    evolve.add_argument("--all-genes-active", action="store_true", help="Draw recessive genes too")
    evolve.add_argument("--frame-mode", choices=FRAME_MODES, default=defaults.frame_mode, help="How saved frames are composed")
    evolve.add_argument("--canvas-size", type=int, nargs=2, default=[800, 800], metavar=("W", "H"), help="Saved frame size")
    evolve.add_argument("--log-interval", type=int, default=defaults.log_interval, help="Generations between fitness log lines")
    evolve.add_argument("--save-interval", type=int, default=50, help="Generations between saved frames (0 disables)")
    evolve.add_argument("--output-dir", default="output", help="Base output directory")
    evolve.add_argument("--verbose", "-v", action="store_true", help="Show per-generation fitness")
    evolve.add_argument("--quiet", "-q", action="store_true", help="Hide the progress bar")
    evolve.set_defaults(func=cmd_evolve)

    phenotypes = subparsers.add_parser("phenotypes", help="List phenotypes and gene lengths")
    phenotypes.set_defaults(func=cmd_phenotypes)

    return parser


def main(argv=None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
