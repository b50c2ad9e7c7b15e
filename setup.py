from setuptools import setup, find_packages

setup(
    name="mkdocs-libcatalog",
    version="1.0.0",
    description="MkDocs plugin that catalogs the functions of a C library",
    keywords="mkdocs c libft catalog documentation python",
    author="Pawel Sikora",
    author_email="sikor6@gmail.com",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "mkdocs>=1.4",
        "markdown>=3.3",
    ],
    extras_require={
        "test": ["pytest"],
    },
    classifiers = [
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Documentation",
        "Topic :: Software Development :: Documentation",
        "Framework :: MkDocs",
    ],
    entry_points={
        "mkdocs.plugins": [
            "libcatalog = mkdocs_libcatalog.plugin:LibcatalogPlugin",
        ],
    },
)
