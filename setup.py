from setuptools import setup, find_packages

setup(
    name="photo-review",
    version="0.1.0",
    package_dir={"": "src"},
    packages=find_packages("src"),
    install_requires=[
        "Pillow>=9.0.0",
        "PyYAML>=6.0",
        "PyQt6>=6.4.0",
        "requests>=2.28.0",
        "Flask>=2.2.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "photo-review=photo_review.viewer.app:main",
            "photo-review-server=photo_review.gallery.save_server:main",
        ],
    },
    python_requires=">=3.10",
)
