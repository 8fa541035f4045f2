# NOTE: This file is more of a playground than a proper test

import timeit
from typing import Tuple

import django
from django.conf import settings

settings.configure(LAZYLOAD={})
django.setup()

from django_lazyload.rewriter import rewrite  # noqa: E402

TAG_NAMES = ["img", "iframe"]


def run_benchmark(html: str, num_iterations: int = 1000) -> Tuple[float, int]:
    """Time repeated rewrites of the given HTML, and count the rewritten tags."""
    elapsed = timeit.timeit(lambda: rewrite(html, TAG_NAMES), number=num_iterations)
    rewritten = rewrite(html, TAG_NAMES).count('class="lazyload"')
    return elapsed, rewritten


def print_benchmark_results(name: str, html: str, elapsed: float, rewritten: int, num_iterations: int) -> None:
    """Print formatted benchmark results."""
    print(f"\nCase: {name}")
    print(f"Input size: {len(html)} chars")
    print(f"Iterations: {num_iterations}")
    print(f"Rewritten tags: {rewritten}")
    print(f"Total: {elapsed:.6f} seconds")
    print(f"Per rewrite: {elapsed / num_iterations * 1000:.3f} ms")


if __name__ == "__main__":
    article = """
        <article class="post">
            <h1>Title</h1>
            <p>Intro text with <a href="/x/">a link</a>.</p>
            <img src="/media/a.jpg" class="wp-image-5 size-large" width="800" height="600" alt="A">
            <img src="/media/b.jpg" srcset="/media/b.jpg 1x, /media/b@2x.jpg 2x" sizes="100vw">
            <iframe src="https://video.test/embed/1" width="560" height="315"></iframe>
            <img src="/media/c.jpg" class="no-lazy">
            <p>Outro.</p>
        </article>
    """

    test_cases = [
        ("No tags", "<p>Hello World</p>" * 100),
        ("Article", article),
        ("Long article", article * 100),
        ("Already processed", rewrite(article * 100, TAG_NAMES)),
        ("Pathological slashes", "<img" + "/" * 50000),
    ]

    for name, html in test_cases:
        num_iterations = 200
        elapsed, rewritten = run_benchmark(html, num_iterations)
        print_benchmark_results(name, html, elapsed, rewritten, num_iterations)
