from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from apps.messes.permissions import IsMessMember, UUID_LOOKUP_REGEX

from .serializers import (
    NoticeSerializer,
    NoticeCreateSerializer,
    TaskSerializer,
    TaskCreateSerializer,
    TaskFilterSerializer,
    ReviewSerializer,
    ReviewCreateSerializer,
    ReviewUpdateSerializer,
    ReviewFilterSerializer,
    RatingSummarySerializer,
)
from .services import (
    list_notices,
    post_notice,
    delete_notice,
    list_tasks,
    create_task,
    toggle_task,
    delete_task,
    list_reviews,
    get_rating_summary,
    create_review,
    update_review,
    delete_review,
    # Exceptions
    MessNotFoundError,
    NotMessMemberError,
    MemberNotFoundError,
    NoticeNotFoundError,
    TaskNotFoundError,
    InsufficientPermissionsError,
    EmptyNoticeError,
    ReviewNotFoundError,
    DuplicateReviewError,
    InvalidRatingError,
)


class NoticeViewSet(viewsets.GenericViewSet):
    """
    list: Notices of the mess, newest first
    create: Post a notice (manager)
    destroy: Delete a notice (manager)
    """

    serializer_class = NoticeSerializer
    permission_classes = [IsAuthenticated, IsMessMember]
    lookup_value_regex = UUID_LOOKUP_REGEX

    def list(self, request, mess_id=None):
        return Response(NoticeSerializer(list_notices(mess_id=mess_id), many=True).data)

    @extend_schema(request=NoticeCreateSerializer, responses={201: NoticeSerializer})
    def create(self, request, mess_id=None):
        serializer = NoticeCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            notice = post_notice(
                mess_id=mess_id,
                author=request.user,
                message=serializer.validated_data['message'],
            )
        except EmptyNoticeError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
        except (NotMessMemberError, InsufficientPermissionsError) as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
        except MessNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response(NoticeSerializer(notice).data, status=status.HTTP_201_CREATED)

    def destroy(self, request, mess_id=None, pk=None):
        try:
            delete_notice(mess_id=mess_id, notice_id=pk, deleted_by=request.user)
        except (NotMessMemberError, InsufficientPermissionsError) as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
        except (MessNotFoundError, NoticeNotFoundError) as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response(status=status.HTTP_204_NO_CONTENT)


class TaskViewSet(viewsets.GenericViewSet):
    """
    list: Tasks of the mess (``?status=`` to filter)
    create: Create a task assigned to a member
    toggle: Flip pending/completed
    destroy: Delete a task (creator or manager)
    """

    serializer_class = TaskSerializer
    permission_classes = [IsAuthenticated, IsMessMember]
    lookup_value_regex = UUID_LOOKUP_REGEX

    @extend_schema(parameters=[TaskFilterSerializer])
    def list(self, request, mess_id=None):
        filters = TaskFilterSerializer(data=request.query_params)
        filters.is_valid(raise_exception=True)

        tasks = list_tasks(mess_id=mess_id, status=filters.validated_data.get('status'))
        return Response(TaskSerializer(tasks, many=True).data)

    @extend_schema(request=TaskCreateSerializer, responses={201: TaskSerializer})
    def create(self, request, mess_id=None):
        serializer = TaskCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            task = create_task(
                mess_id=mess_id,
                created_by=request.user,
                name=serializer.validated_data['name'],
                assigned_to_id=serializer.validated_data['assigned_to'],
                due_date=serializer.validated_data['due_date'],
            )
        except NotMessMemberError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
        except (MessNotFoundError, MemberNotFoundError) as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response(TaskSerializer(task).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=None, responses={200: TaskSerializer})
    @action(detail=True, methods=['post'])
    def toggle(self, request, mess_id=None, pk=None):
        try:
            task = toggle_task(mess_id=mess_id, task_id=pk, user=request.user)
        except NotMessMemberError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
        except (MessNotFoundError, TaskNotFoundError) as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response(TaskSerializer(task).data)

    def destroy(self, request, mess_id=None, pk=None):
        try:
            delete_task(mess_id=mess_id, task_id=pk, deleted_by=request.user)
        except (NotMessMemberError, InsufficientPermissionsError) as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
        except (MessNotFoundError, TaskNotFoundError) as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response(status=status.HTTP_204_NO_CONTENT)


class ReviewViewSet(viewsets.GenericViewSet):
    """
    list: Reviews of the mess (``?min_rating=`` to filter)
    create: Review the mess (one per member)
    partial_update: Edit your own review
    destroy: Delete a review (author or manager)
    summary: Average rating and review count
    """

    serializer_class = ReviewSerializer
    permission_classes = [IsAuthenticated, IsMessMember]
    lookup_value_regex = UUID_LOOKUP_REGEX

    @extend_schema(parameters=[ReviewFilterSerializer])
    def list(self, request, mess_id=None):
        filters = ReviewFilterSerializer(data=request.query_params)
        filters.is_valid(raise_exception=True)

        reviews = list_reviews(mess_id=mess_id, min_rating=filters.validated_data.get('min_rating'))
        return Response(ReviewSerializer(reviews, many=True).data)

    @extend_schema(request=ReviewCreateSerializer, responses={201: ReviewSerializer})
    def create(self, request, mess_id=None):
        serializer = ReviewCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            review = create_review(
                mess_id=mess_id,
                author=request.user,
                rating=serializer.validated_data['rating'],
                comment=serializer.validated_data['comment'],
            )
        except (InvalidRatingError, DuplicateReviewError) as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
        except NotMessMemberError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
        except MessNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response(ReviewSerializer(review).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=ReviewUpdateSerializer, responses={200: ReviewSerializer})
    def partial_update(self, request, mess_id=None, pk=None):
        serializer = ReviewUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            review = update_review(
                mess_id=mess_id,
                review_id=pk,
                user=request.user,
                rating=serializer.validated_data.get('rating'),
                comment=serializer.validated_data.get('comment'),
            )
        except InvalidRatingError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
        except (NotMessMemberError, InsufficientPermissionsError) as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
        except (MessNotFoundError, ReviewNotFoundError) as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response(ReviewSerializer(review).data)

    def destroy(self, request, mess_id=None, pk=None):
        try:
            delete_review(mess_id=mess_id, review_id=pk, user=request.user)
        except (NotMessMemberError, InsufficientPermissionsError) as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
        except (MessNotFoundError, ReviewNotFoundError) as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(responses={200: RatingSummarySerializer})
    @action(detail=False, methods=['get'])
    def summary(self, request, mess_id=None):
        return Response(RatingSummarySerializer(get_rating_summary(mess_id=mess_id)).data)
