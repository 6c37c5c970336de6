from setuptools import setup, find_packages

setup(
    name="bdtree",
    version="0.1.0",
    description="Birth-death tree simulation conditioned on extant lineages, with Newick output",
    package_dir={"": "bdtree"},
    packages=find_packages(where="bdtree"),
    install_requires=[
        "numpy>=1.24",
        "networkx>=3.0",
        "treeswift>=1.1",
    ],
    extras_require={
        "dev": ["pytest>=7.4"],
    },
    entry_points={
        "console_scripts": [
            "bdtree=bdtree.cli:main",
        ],
    },
)
